"""Footnote definition classifier mixin."""

from __future__ import annotations


class FootnoteClassifierMixin:
    """Mixin providing footnote definition classification."""

    def _try_classify_footnote_def(self, content: str) -> bool:
        """Whether content looks like a footnote definition.

        Format: [^identifier]: content

        This is a type hint only. The identifier is validated when the
        definition is built; an invalid one degrades the span to a paragraph.

        Args:
            content: Line content with leading whitespace stripped
        """
        return content.startswith("[^") and content.find("]:", 2) != -1
