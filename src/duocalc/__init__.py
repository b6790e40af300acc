# -*- coding: utf-8 -*-
"""
duocalc - an interactive calculator with numeric and text variables.

Usage:
    from duocalc import Session

    session = Session()
    session.execute("x = 2 + 3 * 4")     # Value(14.0, number)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("duocalc")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from .session import Session

__all__ = ['Session', '__version__']
