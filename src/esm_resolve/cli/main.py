"""
esm-resolve CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import package, resolve


@click.group()
@click.version_option(package_name="esm-resolve")
def main():
    """esm-resolve: Static module specifier resolution.

    Finds the file an import statement would load, following package.json
    exports/imports and the node_modules search, without running Node.

    \b
    Quick Start:
      esm-resolve resolve src/app.js lit ./util "#internal"
      esm-resolve resolve src/app.js lit --constraint node --json
      esm-resolve package lit --from src
    """
    pass


# Register commands
main.add_command(resolve.resolve)
main.add_command(package.package)

if __name__ == "__main__":
    main()
