"""Emphasis pairing for mdtree.

Only active when ``emphasis_enabled`` is set. Without it, * and _ are
ordinary text characters and never reach this pass.

Pairing rule:
- A run of 1-3 delimiter characters can open when followed by
  non-whitespace and close when preceded by non-whitespace
- A closer pairs with the nearest open run of the same character and the
  same length; openers skipped over stay literal
- Length 1 makes Emphasis, 2 makes Strong, 3 makes Strong(Emphasis)
- Unpaired runs and runs longer than 3 stay literal

This is a deliberately small subset of the CommonMark delimiter algorithm:
runs are never split, so ``**a*`` stays literal.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdtree.nodes import Emphasis, Inline, Strong
from mdtree.parsing.charsets import is_unicode_whitespace
from mdtree.parsing.inline.tokens import DelimiterToken, InlineToken, NodeToken

if TYPE_CHECKING:
    from mdtree.parsing.offsets import OffsetMap

MAX_RUN = 3


class EmphasisMixin:
    """Delimiter run classification and pairing.

    Required Host Methods:
        - _build_inline_ast(tokens, offsets) -> tuple[Inline, ...]

    """

    def _build_inline_ast(
        self, tokens: list[InlineToken], offsets: OffsetMap
    ) -> tuple[Inline, ...]:
        raise NotImplementedError

    def _scan_delimiter_run(self, text: str, pos: int) -> DelimiterToken:
        """Measure the run of * or _ starting at ``pos`` and classify it."""
        char = text[pos]
        end = pos
        while end < len(text) and text[end] == char:
            end += 1
        count = end - pos
        before = text[pos - 1] if pos > 0 else ""
        after = text[end] if end < len(text) else ""
        usable = count <= MAX_RUN
        return DelimiterToken(
            char=char,  # type: ignore[arg-type]
            count=count,
            start=pos,
            can_open=usable and not is_unicode_whitespace(after),
            can_close=usable and not is_unicode_whitespace(before),
        )

    def _process_emphasis(
        self, tokens: list[InlineToken], offsets: OffsetMap
    ) -> list[InlineToken]:
        """Fold paired delimiter runs into Emphasis/Strong node tokens.

        Unpaired DelimiterTokens are left in place for the builder to
        render as literal text.
        """
        out: list[InlineToken] = []
        openers: list[int] = []  # indices into out

        for token in tokens:
            if not isinstance(token, DelimiterToken):
                out.append(token)
                continue

            if token.can_close:
                found = self._find_opener(out, openers, token)
                if found is not None:
                    match_index, opener = found
                    inner = out[match_index + 1 :]
                    del out[match_index:]
                    openers = [i for i in openers if i < match_index]
                    node = self._wrap(opener, token, inner, offsets)
                    out.append(NodeToken(node, opener.start, token.end))
                    continue

            if token.can_open:
                openers.append(len(out))
            out.append(token)

        return out

    def _find_opener(
        self, out: list[InlineToken], openers: list[int], closer: DelimiterToken
    ) -> tuple[int, DelimiterToken] | None:
        """Nearest open run with the closer's character and length."""
        for index in reversed(openers):
            match out[index]:
                case DelimiterToken(char=char, count=count) as opener if (
                    char == closer.char and count == closer.count
                ):
                    return index, opener
        return None

    def _wrap(
        self,
        opener: DelimiterToken,
        closer: DelimiterToken,
        inner: list[InlineToken],
        offsets: OffsetMap,
    ) -> Inline:
        content = self._build_inline_ast(inner, offsets)
        location = offsets.location(opener.start, closer.end)
        marker = opener.char
        match opener.count:
            case 1:
                return Emphasis(location=location, content=content, marker=marker)
            case 2:
                return Strong(location=location, content=content, marker=marker)
            case _:
                emphasis = Emphasis(
                    location=offsets.location(opener.start + 2, closer.start + 1),
                    content=content,
                    marker=marker,
                )
                return Strong(location=location, content=(emphasis,), marker=marker)
