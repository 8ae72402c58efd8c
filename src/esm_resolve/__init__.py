"""
esm_resolve - Static module specifier resolution.

Answers "which file does this import statement point to?" for build tools
and dev servers, following package.json exports/imports, legacy entry
fields and Node's node_modules search, without loading any code.

Usage:
    from esm_resolve import build_resolver

    resolve = build_resolver("./src/app.js", constraints=["browser"])
    resolve("lit")        # "../node_modules/lit/index.js"
    resolve("#internal")  # "./internal/impl.js"
"""

__version__ = "0.1.0"

from .config import INERT_PLACEHOLDER, ResolverOptions
from .core.errors import InvariantViolation, ManifestError, ResolverError
from .core.resolver import Resolver, build_resolver

__all__ = [
    "__version__",
    "build_resolver",
    "Resolver",
    "ResolverOptions",
    "INERT_PLACEHOLDER",
    "ResolverError",
    "InvariantViolation",
    "ManifestError",
]
