"""
CLI Commands Package.

Each command is implemented in its own module for maintainability.
"""

from . import package
from . import resolve

__all__ = [
    "package",
    "resolve",
]
