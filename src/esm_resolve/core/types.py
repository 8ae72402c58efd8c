"""
Core type definitions for esm_resolve.

An exports/imports map is modelled as a tagged union of Terminal (a target
string) and Mapping (an ordered sequence of key/child pairs). Key order is
preserved from the manifest because matching priority depends on it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from ..config import LEGACY_ENTRY_FIELDS, MANIFEST_NAME, MAX_EXPORTS_DEPTH
from .errors import ManifestError


@dataclass(frozen=True)
class Terminal:
    """A resolved target string, e.g. "./dist/index.js"."""

    target: str


@dataclass(frozen=True)
class Mapping:
    """
    An ordered exports/imports object.

    Attributes:
        entries: (key, child) pairs in declaration order. A child of None is a
            blocked target (null, array, or a value nested too deeply).
    """

    entries: Tuple[Tuple[str, Optional["ExportsNode"]], ...] = ()

    def __iter__(self) -> Iterator[Tuple[str, Optional["ExportsNode"]]]:
        return iter(self.entries)

    def keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.entries)

    def get(self, key: str) -> Optional["ExportsNode"]:
        """Return the first child declared under key."""
        for candidate, child in self.entries:
            if candidate == key:
                return child
        return None


ExportsNode = Union[Terminal, Mapping]


def parse_exports_node(raw: Any, depth: int = 0) -> Optional[ExportsNode]:
    """
    Convert a decoded JSON value into an ExportsNode.

    Args:
        raw: Value taken from a manifest's "exports" or "imports" field.
        depth: Current nesting level, bounded by MAX_EXPORTS_DEPTH.

    Returns:
        Terminal for strings, Mapping for objects, None for anything else.
    """
    if depth > MAX_EXPORTS_DEPTH:
        return None
    if isinstance(raw, str):
        return Terminal(raw)
    if isinstance(raw, dict):
        return Mapping(
            tuple((str(key), parse_exports_node(value, depth + 1)) for key, value in raw.items())
        )
    return None


@dataclass
class PackageInfo:
    """
    Parsed content of a package.json.

    Attributes:
        name: Declared package name (empty if undeclared).
        exports: Parsed "exports" map, None if absent or blocked.
        exports_blocked: "exports" was declared but is not a string or object
            (an array, number or boolean), so nothing can match it.
        imports: Parsed "imports" map, None if absent.
        main: Legacy CommonJS entry point.
        type: Declared module type ("module" or "commonjs").
        entry_fields: Legacy alternate entry points ("module", "jsnext", ...)
            that were declared as strings.
    """

    name: str = ""
    exports: Optional[ExportsNode] = None
    exports_blocked: bool = False
    imports: Optional[ExportsNode] = None
    main: Optional[str] = None
    type: Optional[str] = None
    entry_fields: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackageInfo":
        """Build from a decoded package.json object."""
        name = data.get("name")
        main = data.get("main")
        pkg_type = data.get("type")

        # An empty-string exports field declares nothing
        raw_exports = data.get("exports")
        exports = parse_exports_node(raw_exports) if raw_exports != "" else None
        blocked = raw_exports not in (None, "") and exports is None

        return cls(
            name=name if isinstance(name, str) else "",
            exports=exports,
            exports_blocked=blocked,
            imports=parse_exports_node(data.get("imports")),
            main=main if isinstance(main, str) else None,
            type=pkg_type if isinstance(pkg_type, str) else None,
            entry_fields={
                key: data[key] for key in LEGACY_ENTRY_FIELDS if isinstance(data.get(key), str)
            },
        )

    @classmethod
    def load(cls, path: Path) -> "PackageInfo":
        """
        Read and parse a package.json file.

        Args:
            path: Path to the manifest.

        Returns:
            PackageInfo parsed from the file.

        Raises:
            ManifestError: If the file is unreadable, not JSON, or not an object.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ManifestError(path, str(e))

        if not isinstance(data, dict):
            raise ManifestError(path, "top-level value is not an object")

        return cls.from_dict(data)

    @property
    def has_exports(self) -> bool:
        return self.exports is not None or self.exports_blocked

    @property
    def is_module(self) -> bool:
        return self.type == "module"

    def legacy_entry(self) -> Optional[str]:
        """First declared alternate entry point, in fixed priority order."""
        for key in LEGACY_ENTRY_FIELDS:
            if key in self.entry_fields:
                return self.entry_fields[key]
        return None


@dataclass(frozen=True)
class PackageLocation:
    """
    A package directory paired with its parsed manifest.

    Attributes:
        directory: Absolute path of the package root.
        info: The manifest found at directory/package.json.
    """

    directory: str
    info: PackageInfo = field(compare=False)

    @property
    def manifest_path(self) -> str:
        return str(Path(self.directory) / MANIFEST_NAME)

    def __repr__(self) -> str:
        name_part = f"{self.info.name!r}, " if self.info.name else ""
        return f"PackageLocation({name_part}{self.directory})"
