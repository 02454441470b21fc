"""Segmenter operating modes."""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Segmenter operating modes.

    - BLOCK: Between blocks, classifying each line by its leading marker
    - CODE_FENCE: Inside a fenced code block, collecting lines verbatim

    """

    BLOCK = auto()
    CODE_FENCE = auto()
