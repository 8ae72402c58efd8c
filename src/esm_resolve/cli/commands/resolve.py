"""
Resolve Command - Resolve import specifiers for one importing file.

Usage:
    esm-resolve resolve src/app.js lit ./util "#internal"
    esm-resolve resolve src/app.js lit --constraint node --json
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
from pydantic import BaseModel, Field

from ...config import ResolverOptions
from ...core.errors import InvariantViolation
from ...core.resolver import build_resolver
from ..utils import configure_logging, echo_error, echo_warning


# --- API Models ---
class ApiResolution(BaseModel):
    specifier: str
    resolved: Optional[str] = None


class ResolveResponse(BaseModel):
    """Standardized response for the resolve command."""

    importer: str
    importer_dir: str
    constraints: List[str]
    results: List[ApiResolution] = Field(default_factory=list)
    unresolved_count: int = 0


@click.command()
@click.argument("importer", type=click.Path())
@click.argument("specifiers", nargs=-1, required=True)
@click.option("-c", "--constraint", "constraints", multiple=True,
              help="Condition to satisfy (repeatable, default: browser)")
@click.option("--allow-missing", is_flag=True, help="Return paths even if they don't exist")
@click.option("--no-peer-types", is_flag=True, help="Don't hide .d.ts-only imports")
@click.option("--strict-exports", is_flag=True,
              help="Don't fall back to literal paths when exports don't match")
@click.option("--no-main-fallback", is_flag=True,
              help="Only use 'main' for packages with type: module")
@click.option("--naked-mjs", is_flag=True, help="Also probe .mjs for paths without extension")
@click.option("--no-nested", is_flag=True, help="Don't look for packages nested in packages")
@click.option("--dir", "is_dir", is_flag=True, help="IMPORTER is a directory, not a file")
@click.option("--absolute", is_flag=True, help="Print absolute paths")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="TOML file with resolver options")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Log resolution steps")
def resolve(
    importer: str,
    specifiers: Tuple[str, ...],
    constraints: Tuple[str, ...],
    allow_missing: bool,
    no_peer_types: bool,
    strict_exports: bool,
    no_main_fallback: bool,
    naked_mjs: bool,
    no_nested: bool,
    is_dir: bool,
    absolute: bool,
    config_file: Optional[str],
    as_json: bool,
    verbose: bool,
) -> None:
    """
    Resolve SPECIFIERS as if imported from IMPORTER.

    Exits with status 1 if any specifier could not be resolved.
    """
    configure_logging(verbose)

    overrides: Dict[str, Any] = {}
    if constraints:
        overrides["constraints"] = constraints
    if allow_missing:
        overrides["allow_missing"] = True
    if no_peer_types:
        overrides["rewrite_peer_types"] = False
    if strict_exports:
        overrides["allow_export_fallback"] = False
    if no_main_fallback:
        overrides["include_main_fallback"] = False
    if naked_mjs:
        overrides["match_naked_mjs"] = True
    if no_nested:
        overrides["check_nested_packages"] = False
    if is_dir:
        overrides["is_dir"] = True
    if absolute:
        overrides["resolve_to_absolute"] = True

    try:
        base = ResolverOptions.load(Path(config_file)) if config_file else None
        resolver = build_resolver(importer, base, **overrides)
    except ValueError as e:
        echo_error(f"Invalid resolver options: {e}")
        sys.exit(2)

    response = ResolveResponse(
        importer=importer,
        importer_dir=resolver.importer_dir,
        constraints=list(resolver.options.constraints),
    )

    for specifier in specifiers:
        try:
            resolved = resolver.resolve(specifier)
        except InvariantViolation as e:
            echo_error(str(e))
            sys.exit(2)
        response.results.append(ApiResolution(specifier=specifier, resolved=resolved))
        if resolved is None:
            response.unresolved_count += 1

    if as_json:
        click.echo(response.model_dump_json(indent=2))
    else:
        _print_results(response)
        if response.unresolved_count:
            echo_warning(f"{response.unresolved_count} specifier(s) not resolved")

    if response.unresolved_count:
        sys.exit(1)


def _print_results(response: ResolveResponse) -> None:
    width = max(len(r.specifier) for r in response.results)
    for result in response.results:
        name = click.style(result.specifier.ljust(width), fg="cyan")
        if result.resolved is None:
            click.echo(f"{name}  {click.style('✗ not resolved', fg='yellow')}")
        else:
            click.echo(f"{name}  → {click.style(result.resolved, fg='green')}")
