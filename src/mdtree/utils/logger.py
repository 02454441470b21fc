"""Logger factory for mdtree modules.

Every module logs through a child of the ``mdtree`` logger, so callers can
turn degrade diagnostics on with a single call:

    >>> import logging
    >>> logging.getLogger("mdtree").setLevel(logging.DEBUG)

The package logger carries a NullHandler and nothing else. Output format
and destination are left to the application.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "mdtree"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the mdtree logger for a module.

    Args:
        name: Module name (typically __name__); bare names are placed
            under the package logger

    Example:
        >>> get_logger("mdtree.lexer.core").name
        'mdtree.lexer.core'
        >>> get_logger("segmenter").name
        'mdtree.segmenter'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
