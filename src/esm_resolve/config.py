"""
Global Configuration and Resolution Defaults.

This module centralizes the fixed names the resolver probes for on disk
and the user-facing ResolverOptions model. Options can be built in code,
from a mapping (snake_case or camelCase keys), or loaded from a TOML file.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# --- Filesystem Names ---

MANIFEST_NAME = "package.json"
DEPENDENCY_DIR = "node_modules"

SCRIPT_EXTENSION = ".js"
MODULE_EXTENSION = ".mjs"
DECLARATION_SUFFIX = ".d.ts"
INDEX_BASENAME = "index"

# --- Manifest Semantics ---

# Searched in this order when a package root is imported without exports
LEGACY_ENTRY_FIELDS: Tuple[str, ...] = (
    "module",
    "esnext:main",
    "esnext",
    "jsnext:main",
    "jsnext",
)

# Honored regardless of caller constraints ("module" works around popular libraries)
ALWAYS_CONDITIONS: Tuple[str, ...] = ("import", "module")

DEFAULT_CONDITION = "default"

# Empty module substituted for type-only (.d.ts) imports
INERT_PLACEHOLDER = "data:text/javascript;charset=utf-8,/* was .d.ts only */"

# Nested exports/imports objects deeper than this are treated as blocked targets
MAX_EXPORTS_DEPTH = 32

# Table read from pyproject-style config files
CONFIG_TABLE = "esm-resolve"


class ResolverOptions(BaseModel):
    """
    Immutable resolver configuration.

    Attributes:
        constraints: Condition names to satisfy besides "import"/"module".
        allow_missing: Return an unconfirmed candidate path instead of nothing.
        rewrite_peer_types: Replace .d.ts-only targets with an inert module.
        allow_export_fallback: Use legacy/literal resolution when exports don't match.
        include_main_fallback: Use "main" even for packages not typed "module".
        match_naked_mjs: Also probe ".mjs" when an extension is missing.
        check_nested_packages: Retry with longer package-name prefixes.
        is_dir: The importer path is a directory, not a file inside one.
        resolve_to_absolute: Return absolute paths rather than importer-relative ones.

    Example:
        ```python
        options = ResolverOptions(constraints="node", allow_missing=True)
        options = ResolverOptions.model_validate({"matchNakedMjs": True})
        ```
    """

    constraints: Tuple[str, ...] = ("browser",)
    allow_missing: bool = False
    rewrite_peer_types: bool = True
    allow_export_fallback: bool = True
    include_main_fallback: bool = True
    match_naked_mjs: bool = False
    check_nested_packages: bool = True
    is_dir: bool = False
    resolve_to_absolute: bool = False

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("constraints", mode="before")
    @classmethod
    def _coerce_constraints(cls, value: Any) -> Any:
        # A single condition name is allowed as shorthand
        if isinstance(value, str):
            return (value,)
        return value

    @property
    def probe_extensions(self) -> Tuple[str, ...]:
        """Extensions tried, in order, when a path has none on disk."""
        if self.match_naked_mjs:
            return (SCRIPT_EXTENSION, MODULE_EXTENSION)
        return (SCRIPT_EXTENSION,)

    def with_overrides(self, **overrides: Any) -> "ResolverOptions":
        """Return a validated copy with the given fields replaced."""
        if not overrides:
            return self
        # camelCase overrides replace their snake_case field, not add to it
        names = {field.alias: name for name, field in type(self).model_fields.items() if field.alias}
        data = self.model_dump()
        data.update({names.get(key, key): value for key, value in overrides.items()})
        return type(self).model_validate(data)

    @classmethod
    def from_value(
        cls,
        value: Union["ResolverOptions", Dict[str, Any], None] = None,
        **overrides: Any,
    ) -> "ResolverOptions":
        """
        Coerce user input into options.

        Args:
            value: Existing options, a mapping of option names, or None.
            **overrides: Individual fields applied on top of value.

        Returns:
            A validated ResolverOptions instance.
        """
        if value is None:
            base = cls()
        elif isinstance(value, ResolverOptions):
            base = value
        else:
            base = cls.model_validate(dict(value))
        return base.with_overrides(**overrides)

    @classmethod
    def load(cls, path: Path) -> "ResolverOptions":
        """
        Load options from a TOML file.

        Reads the [tool.esm-resolve] table when present. A pyproject.toml
        without that table yields defaults; any other file is read whole.

        Args:
            path: Path to the TOML file.

        Returns:
            ResolverOptions parsed from the file.

        Raises:
            ValueError: If the file is unreadable, malformed, or has unknown keys.
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ValueError(f"Failed to parse {path}: {e}")

        tool = data.get("tool")
        tool_section = tool.get(CONFIG_TABLE) if isinstance(tool, dict) else None
        if tool_section is not None:
            if not isinstance(tool_section, dict):
                raise ValueError(f"Failed to parse {path}: [tool.{CONFIG_TABLE}] is not a table")
            table = tool_section
        elif path.name == "pyproject.toml":
            table = {}
        else:
            table = data

        return cls.model_validate(table)
