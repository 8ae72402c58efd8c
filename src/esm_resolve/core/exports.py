"""
Conditional export/import matching.

Given a package's "exports" (or "imports") map and a requested subpath such
as "./foo/bar.js" or "#internal", find the map entry that applies and walk
its nested condition keys down to a single target string.

Matching rules:
    1. A Terminal map (whole-package target) matches any request.
    2. An exact subpath key always wins, regardless of declaration order.
    3. Otherwise the first declared "/*" pattern key whose prefix matches
       wins; the captured remainder must not escape its directory.
    4. Otherwise a map with condition keys at its own top level is used
       as a whole.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config import ALWAYS_CONDITIONS, DEFAULT_CONDITION
from .paths import is_subpath_key, normalizes_to_itself
from .types import ExportsNode, Mapping, Terminal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubpathMatch:
    """
    The map entry selected for a requested subpath.

    Attributes:
        node: The matched node, still possibly holding condition keys.
        capture: Text matched by a "/*" pattern, substituted for "*" later.
    """

    node: Optional[ExportsNode]
    capture: Optional[str] = None


def match_subpath(node: ExportsNode, requested: str) -> Optional[SubpathMatch]:
    """
    Find the entry of an exports/imports map that serves requested.

    Args:
        node: The parsed map.
        requested: Subpath such as "." / "./x.js" or an import key "#x".

    Returns:
        SubpathMatch, or None when nothing in the map applies.
    """
    if isinstance(node, Terminal):
        return SubpathMatch(node)

    fallback: Optional[Mapping] = None
    pattern: Optional[SubpathMatch] = None

    for key, child in node:
        if not is_subpath_key(key):
            # Conditions like "import" at the top level; the whole map may apply
            if fallback is None:
                fallback = node
            continue

        if key == requested:
            return SubpathMatch(child)

        if pattern is not None or not key.endswith("/*"):
            continue

        prefix = key[:-1]
        if not (requested.startswith(prefix) and len(requested) > len(prefix)):
            continue

        capture = requested[len(prefix):]
        if not normalizes_to_itself(capture):
            logger.debug(f"Rejected capture {capture!r} for pattern {key!r}")
            continue

        pattern = SubpathMatch(child, capture)

    if pattern is not None:
        return pattern
    if fallback is not None:
        return SubpathMatch(fallback)
    return None


def select_condition(
    node: Optional[ExportsNode],
    constraints: Sequence[str],
    capture: Optional[str] = None,
) -> Optional[str]:
    """
    Walk nested condition keys down to a target string.

    At each level the first declared key that is always-on or listed in
    constraints is followed; failing that, "default" is followed.

    Args:
        node: Node returned by match_subpath.
        constraints: Caller-satisfied condition names.
        capture: Pattern capture replacing every "*" in the final target.

    Returns:
        The target string, or None if no condition applies.
    """
    while isinstance(node, Mapping):
        for key, child in node:
            if key in ALWAYS_CONDITIONS or key in constraints:
                node = child
                break
        else:
            node = node.get(DEFAULT_CONDITION)

    if node is None:
        return None

    target = node.target
    if capture:
        target = target.replace("*", capture)
    return target


def match_module_node(
    node: ExportsNode,
    requested: str,
    constraints: Sequence[str],
) -> Optional[str]:
    """
    Resolve requested against a map to a final target string.

    Example:
        ```python
        exports = parse_exports_node({"./foo/*": {"browser": "./bar/*.js"}})
        match_module_node(exports, "./foo/x", ["browser"])  # "./bar/x.js"
        ```
    """
    matched = match_subpath(node, requested)
    if matched is None:
        return None
    return select_condition(matched.node, constraints, matched.capture)
