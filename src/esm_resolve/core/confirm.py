"""
Path confirmation against the filesystem.

Maps a candidate path to the file a loader would actually read: the path
itself, the path plus a probed extension, or a directory's index file.
TypeScript declaration files with no runtime peer are swapped for an inert,
empty module so type-only imports still load.
"""

import logging
import os
import re
from typing import Optional

from ..config import DECLARATION_SUFFIX, INDEX_BASENAME, INERT_PLACEHOLDER, ResolverOptions
from .paths import is_file, stat_is_dir, stat_or_none

logger = logging.getLogger(__name__)

# Matches ".js" as a suffix
_SCRIPT_SUFFIX = re.compile(r"\.js$")


class PathConfirmer:
    """
    Confirms candidate paths exist on disk.

    Attributes:
        options: Resolver configuration (probe extensions, peer-type rewriting).
    """

    def __init__(self, options: ResolverOptions):
        self.options = options

    def confirm(self, path: str) -> Optional[str]:
        """
        Find the real file a candidate path denotes.

        Args:
            path: Absolute filesystem path, without ?query or #hash.

        Returns:
            The confirmed path, INERT_PLACEHOLDER for declaration-only
            targets, or None when nothing loadable exists.
        """
        st = stat_or_none(path)
        if st is not None and not stat_is_dir(st):
            return path

        extensions = self.options.probe_extensions

        if st is None:
            for ext in extensions:
                if is_file(path + ext):
                    return path + ext

            if self.options.rewrite_peer_types:
                # Importing "x" or "x.js" is allowed to find an adjacent "x.d.ts"
                for check in (path + DECLARATION_SUFFIX, _SCRIPT_SUFFIX.sub(DECLARATION_SUFFIX, path)):
                    if is_file(check):
                        logger.debug(f"Hiding declaration-only import {check}")
                        return INERT_PLACEHOLDER

            return None

        for ext in extensions:
            check = os.path.join(path, INDEX_BASENAME + ext)
            if is_file(check):
                return check

        # A solo index.d.ts is a valid directory import for TypeScript
        if self.options.rewrite_peer_types and is_file(
            os.path.join(path, INDEX_BASENAME + DECLARATION_SUFFIX)
        ):
            return INERT_PLACEHOLDER

        return None
