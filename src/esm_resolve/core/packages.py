"""
Package discovery.

Finds the package that contains an importing file (the "self" package) and
the packages it depends on, by walking up the directory tree the way Node
searches node_modules. Lookups are plain directory walks; the only cache
is the one held by a PackageLocator instance.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterator, Optional

from ..config import DEPENDENCY_DIR, MANIFEST_NAME
from .errors import ManifestError
from .paths import is_file
from .types import PackageInfo, PackageLocation

logger = logging.getLogger(__name__)


def iter_ancestors(start_dir: str) -> Iterator[str]:
    """Yield start_dir and each parent up to the filesystem root."""
    current = os.path.abspath(start_dir)
    while True:
        yield current
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def dependency_search_paths(start_dir: str) -> Iterator[str]:
    """
    Yield candidate node_modules directories, closest first.

    Ancestors that are themselves named node_modules are skipped, so
    "a/node_modules/node_modules" is never generated.
    """
    for ancestor in iter_ancestors(start_dir):
        if os.path.basename(ancestor) == DEPENDENCY_DIR:
            continue
        yield os.path.join(ancestor, DEPENDENCY_DIR)


def load_location(directory: str) -> Optional[PackageLocation]:
    """
    Read directory/package.json.

    Returns:
        PackageLocation, or None if the manifest is missing or malformed.
    """
    manifest = os.path.join(directory, MANIFEST_NAME)
    if not is_file(manifest):
        return None
    try:
        info = PackageInfo.load(manifest)
    except ManifestError as e:
        logger.debug(f"Skipping malformed manifest: {e}")
        return None
    return PackageLocation(directory=directory, info=info)


def resolve_self_package(start_dir: str) -> Optional[PackageLocation]:
    """
    Find the closest ancestor of start_dir holding a parseable package.json.

    Args:
        start_dir: Directory of the importing file.

    Returns:
        The self package, or None when the walk reaches the root.
    """
    for ancestor in iter_ancestors(start_dir):
        location = load_location(ancestor)
        if location is not None:
            return location
    return None


def resolve_named_package(
    start_dir: str,
    name: str,
    self_package: Optional[PackageLocation] = None,
) -> Optional[PackageLocation]:
    """
    Find a named dependency as seen from start_dir.

    Args:
        start_dir: Directory of the importing file.
        name: Package name, e.g. "lodash" or "@scope/pkg".
        self_package: The self package; returned when its name matches.

    Returns:
        The closest matching PackageLocation, or None.
    """
    if self_package is not None and self_package.info.name == name:
        return self_package

    for search_dir in dependency_search_paths(start_dir):
        location = load_location(os.path.join(search_dir, name))
        if location is not None:
            return location
    return None


class PackageLocator:
    """
    Caching front end over the package discovery walks.

    One instance belongs to one Resolver. Only successful lookups are cached;
    a failed lookup is recomputed on the next request.

    Attributes:
        start_dir: Directory the walks begin from.
    """

    def __init__(self, start_dir: str):
        self.start_dir = start_dir
        self._self: Optional[PackageLocation] = None
        self._named: Dict[str, PackageLocation] = {}

    def self_package(self) -> Optional[PackageLocation]:
        """Return the package containing start_dir."""
        if self._self is None:
            self._self = resolve_self_package(self.start_dir)
            if self._self is not None:
                logger.debug(f"Self package: {self._self!r}")
        return self._self

    def named_package(self, name: str) -> Optional[PackageLocation]:
        """Return the package called name, as seen from start_dir."""
        cached = self._named.get(name)
        if cached is not None:
            return cached

        location = resolve_named_package(self.start_dir, name, self.self_package())
        if location is not None:
            logger.debug(f"Located {name!r} at {location.directory}")
            self._named[name] = location
        return location
