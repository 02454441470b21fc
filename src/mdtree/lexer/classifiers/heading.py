"""Heading marker classifier mixin."""

from mdtree.parsing.charsets import HEADING_MARKER, MARKER_TERMINATORS


class HeadingClassifierMixin:
    """Mixin providing heading line classification."""

    def _try_classify_heading(self, content: str) -> bool:
        """Whether content opens with a heading marker run.

        A run of one or more # characters followed by a space, a tab or the
        end of the line. Runs longer than six still classify; the level is
        clamped when the heading is built.

        Args:
            content: Line content with leading whitespace stripped
        """
        pos = 0
        while pos < len(content) and content[pos] == HEADING_MARKER:
            pos += 1
        if pos == 0:
            return False
        return pos == len(content) or content[pos] in MARKER_TERMINATORS
