"""
Package Command - Inspect how a package is discovered.

Shows where a package is found from a given directory and renders its
exports/imports maps in declaration order, which is the order matching
uses.

Usage:
    esm-resolve package lit --from src
    esm-resolve package --self --from src
"""

from __future__ import annotations

import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ...core.packages import PackageLocator
from ...core.paths import is_subpath_key
from ...core.types import ExportsNode, PackageLocation, Terminal

console = Console()


@click.command()
@click.argument("name", required=False)
@click.option(
    "--from",
    "start_dir",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Directory to search from",
)
@click.option("--self", "show_self", is_flag=True, help="Show the package containing --from")
def package(name: Optional[str], start_dir: str, show_self: bool):
    """
    Locate package NAME and show its entry points.
    """
    if not name and not show_self:
        raise click.UsageError("Provide a package NAME or --self")
    if name and show_self:
        raise click.UsageError("NAME and --self cannot be combined")

    locator = PackageLocator(start_dir)
    location = locator.self_package() if show_self else locator.named_package(name)

    if location is None:
        label = "self package" if show_self else f"package '{name}'"
        console.print(f"[red]Error:[/red] No {label} found from {start_dir}")
        sys.exit(1)

    console.print(_package_tree(location))


def _package_tree(location: PackageLocation) -> Tree:
    info = location.info
    title = escape(info.name) if info.name else "[dim]<unnamed>[/dim]"
    tree = Tree(f"📦 [bold]{title}[/bold]")
    tree.add(f"[dim]→ {escape(location.manifest_path)}[/dim]")

    if info.type:
        tree.add(f"type: [cyan]{escape(info.type)}[/cyan]")
    for key, value in info.entry_fields.items():
        tree.add(f"{key}: [green]{escape(value)}[/green]")
    if info.main:
        tree.add(f"main: [green]{escape(info.main)}[/green]")

    if info.exports_blocked:
        tree.add("📚 exports: [dim]blocked[/dim]")
    for label, node in (("exports", info.exports), ("imports", info.imports)):
        if node is None:
            continue
        _add_node(tree.add(f"📚 {label}"), node)

    return tree


def _add_node(branch: Tree, node: Optional[ExportsNode]) -> None:
    if isinstance(node, Terminal):
        branch.add(f"[green]{escape(node.target)}[/green]")
        return
    if node is None:
        branch.add("[dim]null[/dim]")
        return

    for key, child in node:
        style = "cyan" if is_subpath_key(key) else "magenta"
        if isinstance(child, Terminal):
            branch.add(f"[{style}]{escape(key)}[/{style}] → [green]{escape(child.target)}[/green]")
        elif child is None:
            branch.add(f"[{style}]{escape(key)}[/{style}] → [dim]null[/dim]")
        else:
            _add_node(branch.add(f"[{style}]{escape(key)}[/{style}]"), child)
