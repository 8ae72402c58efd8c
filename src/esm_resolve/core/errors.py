"""
Exceptions raised by the resolution engine.

Negative outcomes (nothing matched, file missing) are returned as None and
never raised. Only contract breaches and unreadable manifests surface here.
"""

from pathlib import Path


class ResolverError(Exception):
    """Base class for all esm_resolve errors."""


class InvariantViolation(ResolverError):
    """
    Raised when package resolution produces a locator that is not a local file.

    Attributes:
        locator: The offending locator string.
    """

    def __init__(self, locator: str):
        self.locator = locator
        super().__init__(f"expected file: locator, was: {locator}")


class ManifestError(ResolverError, ValueError):
    """
    Raised when a package.json cannot be read or parsed.

    Attributes:
        path: Path to the manifest.
        message: Human-readable reason.
    """

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Failed to parse {path}: {message}")
