"""Line classifiers for the block segmenter.

Each classifier is a mixin that decides whether a line's content opens a
particular block type. Classifiers look at one line (fences additionally
look ahead for their closing line) and never move the scan position.
"""

from mdtree.lexer.classifiers.fence import FenceClassifierMixin
from mdtree.lexer.classifiers.footnote import FootnoteClassifierMixin
from mdtree.lexer.classifiers.heading import HeadingClassifierMixin
from mdtree.lexer.classifiers.list import ListClassifierMixin

__all__ = [
    "FenceClassifierMixin",
    "FootnoteClassifierMixin",
    "HeadingClassifierMixin",
    "ListClassifierMixin",
]
