"""
Node-style package resolution.

Turns a bare, scoped, subpath or "#internal" specifier into a file: locator
inside the package that provides it.

Resolution Strategy:
    1. "#imports" of the self package (may alias to another package)
    2. "exports" of the named package
    3. Legacy entry fields ("module", "jsnext", ... then "main")
    4. Literal path under the package directory
    5. Longer name prefixes, for packages nested inside other packages
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..config import ResolverOptions
from .exports import match_module_node
from .packages import PackageLocator
from .paths import file_locator, is_local
from .types import PackageLocation

logger = logging.getLogger(__name__)


def split_specifier(specifier: str) -> Optional[Tuple[List[str], int]]:
    """
    Split a specifier into path components and the package-name length.

    "@scope/pkg/x.js" gives (["@scope", "pkg", "x.js"], 2) and "pkg/x.js"
    gives (["pkg", "x.js"], 1).

    Returns:
        The components and how many of them form the package name, or None
        when the specifier cannot name a package (relative or absolute paths).
    """
    components = specifier.split("/")
    first = components[0]
    if not first or first.startswith("."):
        return None
    return components, (2 if first.startswith("@") else 1)


class NodeResolver:
    """
    Resolves package specifiers to file: locators.

    Attributes:
        locator: Package discovery, shared with the owning Resolver.
        options: Resolver configuration.
    """

    def __init__(self, locator: PackageLocator, options: ResolverOptions):
        self.locator = locator
        self.options = options

    def resolve(self, specifier: str) -> Optional[str]:
        """
        Resolve a specifier via package metadata.

        Args:
            specifier: Bare, scoped, subpath or "#internal" specifier.

        Returns:
            A file: locator (possibly with ?query/#hash), or None when the
            specifier should be treated as a plain relative path.
        """
        if specifier.startswith("#"):
            pkg = self.locator.self_package()
            if pkg is None or pkg.info.imports is None:
                return None

            matched = match_module_node(pkg.info.imports, specifier, self.options.constraints)
            if matched is None:
                return None
            if is_local(matched):
                return file_locator(pkg.directory, matched)

            # Aliased to another package; continue as a bare specifier
            logger.debug(f"{specifier!r} aliases package specifier {matched!r}")
            specifier = matched

        split = split_specifier(specifier)
        if split is None:
            return None
        components, index = split

        fallback_best: Optional[str] = None

        while True:
            name = "/".join(components[:index])
            rest = "/".join([".", *components[index:]])

            pkg = self.locator.named_package(name)
            if pkg is not None:
                if pkg.info.has_exports:
                    matched = None
                    if pkg.info.exports is not None:
                        matched = match_module_node(pkg.info.exports, rest, self.options.constraints)
                    if matched is not None and is_local(matched):
                        return file_locator(pkg.directory, matched)
                    if matched is not None:
                        logger.debug(f"{name!r} exports non-local target {matched!r}")
                    if not self.options.allow_export_fallback:
                        logger.debug(f"{rest!r} not exported by {name!r}")
                        return None

                if rest == ".":
                    return file_locator(pkg.directory, self._legacy_entry(pkg))

                if fallback_best is None:
                    fallback_best = file_locator(pkg.directory, rest)

            index += 1
            if not self.options.check_nested_packages or index > len(components):
                break

        return fallback_best

    def _legacy_entry(self, pkg: PackageLocation) -> str:
        """Pick the root entry point of a package without a usable exports map."""
        entry = pkg.info.legacy_entry()
        if entry is not None:
            return entry

        if pkg.info.main is not None and (self.options.include_main_fallback or pkg.info.is_module):
            return pkg.info.main

        return "."
