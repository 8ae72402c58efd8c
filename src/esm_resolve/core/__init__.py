"""
esm_resolve Core Module.

The resolution engine, leaves first:

Data Model:
    - Terminal, Mapping: Parsed exports/imports maps
    - PackageInfo, PackageLocation: Parsed package.json and its directory

Components:
    - PathConfirmer: Extension/index probing and .d.ts hiding
    - match_module_node: Conditional export/import matching
    - PackageLocator: Self package and node_modules discovery
    - NodeResolver: Package specifiers to file: locators
    - Resolver: Public orchestration and output formatting
"""

from .confirm import PathConfirmer
from .errors import InvariantViolation, ManifestError, ResolverError
from .exports import SubpathMatch, match_module_node, match_subpath, select_condition
from .node import NodeResolver, split_specifier
from .packages import (
    PackageLocator,
    resolve_named_package,
    resolve_self_package,
)
from .resolver import Resolver, build_resolver
from .types import (
    ExportsNode,
    Mapping,
    PackageInfo,
    PackageLocation,
    Terminal,
    parse_exports_node,
)

__all__ = [
    # Types
    "ExportsNode",
    "Terminal",
    "Mapping",
    "PackageInfo",
    "PackageLocation",
    "parse_exports_node",
    # Errors
    "ResolverError",
    "InvariantViolation",
    "ManifestError",
    # Matching
    "SubpathMatch",
    "match_subpath",
    "select_condition",
    "match_module_node",
    # Packages
    "PackageLocator",
    "resolve_self_package",
    "resolve_named_package",
    # Resolution
    "PathConfirmer",
    "NodeResolver",
    "split_specifier",
    "Resolver",
    "build_resolver",
]
