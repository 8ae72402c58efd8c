"""
Module Specifier Resolver.

Public entry point: answers "which file does this import statement load?"
for one importing file, without running a module loader.

Resolution Strategy:
    1. Absolute URLs are left alone (no result)
    2. Package specifiers via NodeResolver
    3. Anything else relative to the importer's directory
    4. Confirm the file exists (extension/index probing)
    5. Format relative to the importer, keeping ?query/#hash
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import quote, unquote, urljoin, urlsplit

from ..config import ResolverOptions
from .confirm import PathConfirmer
from .errors import InvariantViolation
from .node import NodeResolver
from .packages import PackageLocator
from .paths import RELATIVE_PREFIX, is_absolute_url, split_suffix

logger = logging.getLogger(__name__)

OptionsLike = Union[ResolverOptions, Dict[str, Any], None]


class Resolver:
    """
    Resolves import specifiers written inside one file.

    Importers are the same for every file in a directory, so only the
    importer's directory is kept. An instance caches package lookups and
    must not be shared between threads without external locking.

    Attributes:
        importer_dir: Absolute directory that relative specifiers start from.
        options: Resolver configuration.

    Example:
        ```python
        resolver = Resolver("./src/app.js", ResolverOptions(constraints=["node"]))
        resolver.resolve("lodash-es")   # "../node_modules/lodash-es/lodash.js"
        resolver.resolve("./util")      # "./util.js"
        ```
    """

    def __init__(self, importer: Union[str, Path], options: Optional[ResolverOptions] = None):
        """
        Initialize the resolver.

        Args:
            importer: Path of the importing file (or its directory when
                options.is_dir is set).
            options: Resolver configuration; defaults apply when omitted.
        """
        self.options = options if options is not None else ResolverOptions()

        importer_path = os.path.abspath(os.fspath(importer))
        if self.options.is_dir:
            self.importer_dir = importer_path
        else:
            self.importer_dir = os.path.dirname(importer_path)

        self._importer_url = Path(self.importer_dir).as_uri()
        if not self._importer_url.endswith("/"):
            self._importer_url += "/"
        self.locator = PackageLocator(self.importer_dir)
        self._node = NodeResolver(self.locator, self.options)
        self._confirmer = PathConfirmer(self.options)

    def resolve(self, specifier: str) -> Optional[str]:
        """
        Resolve a specifier to a path string.

        Args:
            specifier: Bare, scoped, relative, "#internal" or URL specifier.

        Returns:
            A path starting with "./", "../" or "/" (absolute when
            options.resolve_to_absolute is set), the inert placeholder URL,
            or None when the target cannot be resolved.

        Raises:
            InvariantViolation: If package resolution yields a non-file locator.
        """
        if is_absolute_url(specifier):
            return None

        located = self._node.resolve(specifier)
        if located is not None:
            parts = urlsplit(located)
            if parts.scheme != "file":
                raise InvariantViolation(located)
        else:
            # Relative specifiers name files literally; "%20" is not decoded
            path_part, tail = split_suffix(specifier)
            parts = urlsplit(urljoin(self._importer_url, quote(path_part) + tail))

        pathname = unquote(parts.path)
        suffix = (f"?{parts.query}" if parts.query else "") + (
            f"#{parts.fragment}" if parts.fragment else ""
        )

        confirmed = self._confirmer.confirm(pathname)
        if confirmed is not None:
            pathname = confirmed
        elif not self.options.allow_missing:
            logger.debug(f"Could not confirm {specifier!r} at {pathname}")
            return None

        # Confirmation may produce a data: URL for declaration-only imports
        if is_absolute_url(pathname):
            return pathname + suffix

        if self.options.resolve_to_absolute:
            return os.path.normpath(pathname) + suffix

        out = os.path.relpath(pathname, self.importer_dir).replace(os.sep, "/")
        if out == ".":
            out = ""
        if not RELATIVE_PREFIX.match(out):
            out = f"./{out}"
        return out + suffix

    def __call__(self, specifier: str) -> Optional[str]:
        return self.resolve(specifier)


def build_resolver(
    importer: Union[str, Path],
    options: OptionsLike = None,
    **overrides: Any,
) -> Resolver:
    """
    Build a resolver bound to an importing file.

    Args:
        importer: Path of the importing file.
        options: ResolverOptions, a mapping of option names (snake_case or
            camelCase), or None for defaults.
        **overrides: Individual options applied on top of options.

    Returns:
        A Resolver; call it (or its resolve method) with each specifier.

    Raises:
        ValueError: If an option is unknown or has the wrong type.
    """
    return Resolver(importer, ResolverOptions.from_value(options, **overrides))
