"""Mode-specific scanners for the block segmenter.

Each scanner is a mixin that provides scanning logic for one segmenter
mode (BLOCK, CODE_FENCE).
"""

from __future__ import annotations

from mdtree.lexer.scanners.block import BlockScannerMixin
from mdtree.lexer.scanners.fence import FenceScannerMixin

__all__ = [
    "BlockScannerMixin",
    "FenceScannerMixin",
]
