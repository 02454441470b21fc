"""Markdown renderer: turns an AST back into source text.

Output is normalized (one blank line between blocks, ``-`` bullets,
ordered items numbered from ``List.start``) and escaped so that parsing it
again yields a structurally equal tree:

- Emphasis and Strong keep the delimiter character they were parsed with
- Backslashes, ``[``, ``*`` and ``_`` in text are always escaped
- A line that would open a block (``#``, ``-``, ``1.``, fences,
  ``[^id]:``) is escaped at its start
- Nested blocks are indented past their list marker

Example:
    >>> from mdtree import parse, render_markdown
    >>> render_markdown(parse("#  Title\\n\\n* one\\n* two"))
    '# Title\\n\\n- one\\n- two\\n'

"""

from typing import assert_never

from mdtree.errors import RenderError
from mdtree.nodes import (
    Block,
    Document,
    Emphasis,
    FencedCode,
    FootnoteDef,
    FootnoteRef,
    Heading,
    Image,
    Inline,
    Link,
    List,
    ListItem,
    Paragraph,
    Strong,
    Text,
)
from mdtree.parsing.charsets import (
    DIGITS,
    FENCE_CHARS,
    HEADING_MARKER,
    MARKER_TERMINATORS,
    ORDERED_LIST_DELIMITER,
    UNORDERED_LIST_MARKERS,
    WHITESPACE,
    fence_run,
)
from mdtree.stringbuilder import StringBuilder

# Escaped wherever they appear in text
_TEXT_ESCAPES = frozenset("\\[*_")

# Escaped inside link labels, destinations and titles
_LABEL_ESCAPES = frozenset("\\[]")
_DESTINATION_ESCAPES = frozenset("\\()")
_TITLE_ESCAPES = frozenset('\\"')


def _escape(text: str, chars: frozenset[str]) -> str:
    if not any(c in chars for c in text):
        return text
    return "".join("\\" + c if c in chars else c for c in text)


def escape_text(value: str) -> str:
    """Escape a Text value so it reads back as literal text.

    A trailing ``!`` is escaped too, since the next node may be a link.
    """
    escaped = _escape(value, _TEXT_ESCAPES)
    if escaped.endswith("!"):
        escaped = escaped[:-1] + "\\!"
    return escaped


def _pick_marker(preferred: str, enclosing: str | None, previous: str | None) -> str:
    """Delimiter for a node that records none.

    Avoids the enclosing node's character and that of a delimited sibling
    written just before, so the runs stay separate when parsed again.
    """
    other = "*" if preferred == "_" else "_"
    if preferred in (enclosing, previous) and other not in (enclosing, previous):
        return other
    return preferred


def escape_line_start(line: str) -> str:
    """Escape a line that the segmenter would read as a block marker."""
    if not line:
        return line
    first = line[0]

    if first in FENCE_CHARS and fence_run(line)[1] >= 3:
        return "\\" + line

    if first == HEADING_MARKER:
        run = len(line) - len(line.lstrip(HEADING_MARKER))
        if run == len(line) or line[run] in MARKER_TERMINATORS:
            return "\\" + line

    if first in UNORDERED_LIST_MARKERS and (len(line) == 1 or line[1] in MARKER_TERMINATORS):
        return "\\" + line

    if first in DIGITS:
        digits = 0
        while digits < len(line) and line[digits] in DIGITS:
            digits += 1
        if line[digits : digits + 1] == ORDERED_LIST_DELIMITER and (
            digits + 1 == len(line) or line[digits + 1] in MARKER_TERMINATORS
        ):
            return line[:digits] + "\\" + line[digits:]

    if line.startswith("[^"):
        if line.find("]:", 2) != -1:
            return line.replace("]:", "]\\:")

    return line


class MarkdownRenderer:
    """Render an AST back to markdown text.

    Conforms to ``ASTRenderer``.

    Usage:
            >>> renderer = MarkdownRenderer()
            >>> renderer.render(doc)
            '# Title\\n'

    Thread Safety:
        Instances hold only immutable settings. Safe to share across threads.

    """

    __slots__ = ("_delimiter",)

    def __init__(self, *, delimiter: str = "---") -> None:
        """Initialize renderer.

        Args:
            delimiter: Line written before and after frontmatter tokens
        """
        self._delimiter = delimiter

    def render(self, node: Document) -> str:
        """Render document to markdown.

        Raises:
            RenderError: The tree holds something with no markdown form
                (an empty list, an empty link destination, a bad level).
        """
        lines: list[str] = []
        if node.frontmatter is not None:
            lines.append(self._delimiter)
            for token in node.frontmatter:
                if token.text == self._delimiter or "\n" in token.text:
                    msg = f"frontmatter line {token.lineno} cannot be written inside the block"
                    raise RenderError(msg)
                lines.append(token.text)
            lines.append(self._delimiter)
        lines.extend(self._render_blocks(node.body, ""))
        return "\n".join(lines) + "\n" if lines else ""

    # =========================================================================
    # Blocks
    # =========================================================================

    def _render_blocks(self, blocks: tuple[Block, ...], indent: str) -> list[str]:
        lines: list[str] = []
        for index, block in enumerate(blocks):
            if index:
                lines.append("")
            lines.extend(self._render_block(block, indent))
        return lines

    def _render_block(self, block: Block, indent: str) -> list[str]:
        """Render a block node as lines, each prefixed with ``indent``."""
        match block:
            case Heading(level=level, content=content):
                if not 1 <= level <= 6:
                    msg = f"heading level must be 1-6, got {level}"
                    raise RenderError(msg)
                text = self._render_inlines(content)
                return [f"{indent}{HEADING_MARKER * level} {text}".rstrip()]
            case Paragraph(content=content):
                return [indent + line for line in self._paragraph_lines(content)]
            case List():
                return self._render_list(block, indent)
            case ListItem():
                return self._render_item(block, "-", indent)
            case FencedCode():
                return self._render_fenced_code(block, indent)
            case FootnoteDef():
                return self._render_footnote_def(block, indent)
            case _:
                assert_never(block)

    def _render_list(self, node: List, indent: str) -> list[str]:
        if not node.items:
            msg = "cannot render a List with no items"
            raise RenderError(msg)
        lines: list[str] = []
        for i, item in enumerate(node.items):
            marker = f"{node.start + i}{ORDERED_LIST_DELIMITER}" if node.ordered else "-"
            lines.extend(self._render_item(item, marker, indent))
        return lines

    def _render_item(self, item: ListItem, marker: str, indent: str) -> list[str]:
        """Marker line with the leading paragraph, then nested blocks."""
        head = indent + marker
        if item.checked is not None:
            head += " [x]" if item.checked else " [ ]"
        child_indent = indent + " " * (len(marker) + 1)
        return self._render_led_block(head, item.content, child_indent)

    def _render_footnote_def(self, node: FootnoteDef, indent: str) -> list[str]:
        identifier = node.identifier
        if not identifier or any(c in WHITESPACE or c in "[]" for c in identifier):
            msg = f"invalid footnote identifier: {identifier!r}"
            raise RenderError(msg)
        return self._render_led_block(f"{indent}[^{identifier}]:", node.content, indent + "  ")

    def _render_led_block(
        self, head: str, content: tuple[Block, ...], child_indent: str
    ) -> list[str]:
        rest = content
        lines = [head]
        if content and isinstance(content[0], Paragraph):
            para = self._paragraph_lines(content[0].content)
            lines = [f"{head} {para[0]}".rstrip()]
            lines.extend(child_indent + line for line in para[1:])
            rest = content[1:]
        for block in rest:
            lines.append("")
            lines.extend(self._render_block(block, child_indent))
        return lines

    def _render_fenced_code(self, node: FencedCode, indent: str) -> list[str]:
        """Fence long enough that no code line can close it early."""
        marker = node.marker
        code = node.code[:-1] if node.code.endswith("\n") else node.code
        code_lines = code.split("\n") if node.code else []

        run = 3
        for line in code_lines:
            char, count = fence_run(line.lstrip(" "))
            if char == marker and count >= run:
                run = count + 1
        fence = marker * run

        info = _escape(node.info or "", frozenset("\\"))
        if marker == "`" and "`" in info:
            msg = "backtick fence info string cannot contain a backtick"
            raise RenderError(msg)

        lines = [f"{indent}{fence}{info}".rstrip()]
        lines.extend(indent + line if line else "" for line in code_lines)
        lines.append(indent + fence)
        return lines

    # =========================================================================
    # Inlines
    # =========================================================================

    def _paragraph_lines(self, content: tuple[Inline, ...]) -> list[str]:
        return [escape_line_start(line) for line in self._render_inlines(content).split("\n")]

    def _render_inlines(self, nodes: tuple[Inline, ...], enclosing: str | None = None) -> str:
        """Render inline nodes.

        Args:
            nodes: Sibling inline nodes
            enclosing: Delimiter character of the surrounding Emphasis or
                Strong, if any
        """
        sb = StringBuilder()
        previous: str | None = None
        for node in nodes:
            previous = self._render_inline(node, sb, enclosing, previous)
        return sb.build()

    def _render_inline(
        self, node: Inline, sb: StringBuilder, enclosing: str | None, previous: str | None
    ) -> str | None:
        """Render a single inline node.

        Returns:
            The delimiter character written around the node, or None when
            the node is not Emphasis or Strong.
        """
        match node:
            case Text(value=value):
                sb.append(escape_text(value))
            case Link(text=text, href=href, title=title):
                self._render_reference(sb, text, href, title)
            case Image(alt=alt, src=src, title=title):
                sb.append("!")
                self._render_reference(sb, alt, src, title)
            case FootnoteRef(identifier=identifier):
                sb.append("[^").append(identifier).append("]")
            case Emphasis(content=content, marker=marker):
                char = marker or _pick_marker("_", enclosing, previous)
                sb.append(char).append(self._render_inlines(content, char)).append(char)
                return char
            case Strong(content=content, marker=marker):
                char = marker or _pick_marker("*", enclosing, previous)
                run = char * 2
                sb.append(run).append(self._render_inlines(content, char)).append(run)
                return char
            case _:
                assert_never(node)
        return None

    def _render_reference(
        self, sb: StringBuilder, label: str, destination: str, title: str | None
    ) -> None:
        if not destination:
            msg = f"link or image {label!r} has an empty destination"
            raise RenderError(msg)
        label = _escape(label, _LABEL_ESCAPES)
        if label.startswith("^"):
            label = "\\" + label
        sb.append("[").append(label).append("](")
        sb.append(_escape(destination, _DESTINATION_ESCAPES))
        if title is not None:
            sb.append(' "').append(_escape(title, _TITLE_ESCAPES)).append('"')
        sb.append(")")


def render_markdown(doc: Document, *, delimiter: str = "---") -> str:
    """Render document to markdown.

    Args:
        doc: Document AST to render.
        delimiter: Frontmatter delimiter line.

    Returns:
        Markdown text that parses back to a structurally equal document.
    """
    return MarkdownRenderer(delimiter=delimiter).render(doc)
