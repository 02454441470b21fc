"""Fenced code block classifier mixin."""

from bisect import bisect_left

from mdtree.lexer.modes import LexerMode
from mdtree.parsing.charsets import fence_run


class FenceClassifierMixin:
    """Mixin providing fenced code block classification."""

    # These will be set by the Segmenter class
    _source: str
    _source_len: int
    _pos: int
    _fence_char: str
    _fence_count: int
    _fence_indent: int
    _fence_lines: dict[str, tuple[list[int], list[int], list[int]]] | None
    _fence_reach: dict[tuple[str, int], list[int]]
    _mode: LexerMode

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level. Implemented by Segmenter."""
        raise NotImplementedError

    def _try_classify_fence_start(self, content: str, indent: int) -> bool:
        """Try to classify content as a fenced code opening line.

        Fenced code blocks start with 3+ backticks or tildes. Backtick fences
        cannot have backticks in the info string. A fence with no closing line
        anywhere below is not a fence; the line stays text.

        On success the segmenter switches to CODE_FENCE mode.

        Args:
            content: Line content with leading whitespace stripped
            indent: Indentation column of the line

        Returns:
            True if the line opens a fence.
        """
        fence_char, count = fence_run(content)
        if count < 3:
            return False

        info = content[count:].strip()
        if fence_char == "`" and "`" in info:
            return False

        if not self._has_closing_fence(fence_char, count, indent):
            return False

        self._fence_char = fence_char
        self._fence_count = count
        self._fence_indent = indent
        self._mode = LexerMode.CODE_FENCE
        return True

    def _is_closing_fence(self, line: str) -> bool:
        """Check if line closes the current code block.

        Args:
            line: Full line content including leading whitespace

        Returns:
            True if this is a valid closing fence.
        """
        return self._closes(line, self._fence_char, self._fence_count, self._fence_indent)

    def _closes(self, line: str, fence_char: str, fence_count: int, fence_indent: int) -> bool:
        if not fence_char:
            return False
        indent, content_start = self._calc_indent(line)
        # 4+ columns past the opening fence means NOT a closing fence
        if indent >= fence_indent + 4:
            return False
        content = line[content_start:]
        char, count = fence_run(content)
        if char != fence_char or count < fence_count:
            return False
        return content[count:].strip() == ""

    def _has_closing_fence(self, fence_char: str, fence_count: int, fence_indent: int) -> bool:
        """Look ahead from the current position for a closing fence line.

        Answered from an index of closing-capable lines built on first use, so
        a run of unclosed openers does not rescan the rest of the input each
        time. One suffix-maximum table is kept per (character, indent limit).
        """
        if self._fence_lines is None:
            self._fence_lines = self._index_fence_lines()
        entry = self._fence_lines.get(fence_char)
        if entry is None:
            return False
        positions, indents, counts = entry

        limit = fence_indent + 3
        key = (fence_char, limit)
        reach = self._fence_reach.get(key)
        if reach is None:
            reach = [0] * (len(positions) + 1)
            for i in range(len(positions) - 1, -1, -1):
                own = counts[i] if indents[i] <= limit else 0
                reach[i] = max(own, reach[i + 1])
            self._fence_reach[key] = reach

        return reach[bisect_left(positions, self._pos)] >= fence_count

    def _index_fence_lines(self) -> dict[str, tuple[list[int], list[int], list[int]]]:
        """Positions, indents and run lengths of lines that could close a fence."""
        index: dict[str, tuple[list[int], list[int], list[int]]] = {}
        pos = self._pos
        while pos < self._source_len:
            end = self._source.find("\n", pos)
            if end == -1:
                end = self._source_len
            line = self._source[pos:end].rstrip("\r")
            indent, content_start = self._calc_indent(line)
            content = line[content_start:]
            char, count = fence_run(content)
            if count >= 3 and content[count:].strip() == "":
                positions, indents, counts = index.setdefault(char, ([], [], []))
                positions.append(pos)
                indents.append(indent)
                counts.append(count)
            pos = end + 1
        return index
