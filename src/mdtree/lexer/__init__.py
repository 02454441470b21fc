"""Lexers for mdtree.

Two single-pass, line-window lexers feed the parser:

lexer/
├── __init__.py          # Re-exports
├── frontmatter.py       # Frontmatter tokenizer
├── core.py              # Block segmenter (mixin composition + navigation)
├── modes.py             # LexerMode enum
├── classifiers/         # Line classification mixins
│   ├── heading.py       # # markers
│   ├── list.py          # -, *, +, 1. markers
│   ├── fence.py         # ``` / ~~~ fences
│   └── footnote.py      # [^id]: definitions
└── scanners/            # Mode-specific scanners
    ├── block.py         # Block mode (main dispatch, span extension)
    └── fence.py         # Code fence mode

Usage:
    >>> from mdtree.lexer import Segmenter
    >>> for span in Segmenter("# Hello\\n\\nWorld").segment():
    ...     print(span)
    Span(HEADING, '# Hello', 1-1, indent=0)
    Span(TEXT, 'World', 3-3, indent=0)

"""

from mdtree.lexer.core import Segmenter, segment
from mdtree.lexer.frontmatter import FrontmatterLexer, FrontmatterScan, tokenize_frontmatter
from mdtree.lexer.modes import LexerMode

__all__ = [
    "FrontmatterLexer",
    "FrontmatterScan",
    "LexerMode",
    "Segmenter",
    "segment",
    "tokenize_frontmatter",
]
