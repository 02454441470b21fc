"""Exception classes for mdtree.

Only conditions that make the document unparseable raise. Malformed block
and inline markup degrades to literal content and never reaches this module.
"""

from __future__ import annotations


class MdtreeError(Exception):
    """Base exception for all mdtree errors."""

    pass


class ParseError(MdtreeError):
    """Error during document parsing.

    Raised when the parser cannot establish the document structure at all.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class UnterminatedFrontmatter(ParseError):
    """An opening frontmatter delimiter has no matching closing line.

    Fatal: without the closing delimiter there is no way to tell where the
    body begins, so the whole parse is aborted.
    """

    def __init__(
        self,
        delimiter: str,
        lineno: int = 1,
        source_file: str | None = None,
    ) -> None:
        """Initialize with the delimiter and the line of the opening fence.

        Args:
            delimiter: The frontmatter delimiter that was opened (e.g. "---")
            lineno: Line of the opening delimiter
            source_file: Path to source file (optional)
        """
        self.delimiter = delimiter
        super().__init__(
            f"frontmatter opened with {delimiter!r} is never closed",
            lineno=lineno,
            col_offset=1,
            source_file=source_file,
        )


class RenderError(MdtreeError):
    """Error while rendering a tree back to text.

    Raised when a renderer meets a node it cannot express.
    """

    pass
