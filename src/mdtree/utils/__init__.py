"""Utility modules for mdtree.

Provides:
- logger: get_logger for namespaced logging
"""

from mdtree.utils.logger import get_logger

__all__ = ["get_logger"]
