"""
Filesystem and URL primitives shared by the resolver components.

Every probe is a blocking stat; any OS failure is reported as "missing".
"""

import os
import posixpath
import re
import stat
from typing import Optional, Tuple
from urllib.parse import quote, urlsplit

# Matches "../", "./" or "/" as a prefix
RELATIVE_PREFIX = re.compile(r"^\.{0,2}/")

# Splits a target into its path and trailing ?query / #hash
_SUFFIX_SPLIT = re.compile(r"^([^?#]*)(.*)$", re.DOTALL)


def stat_or_none(path: str) -> Optional[os.stat_result]:
    try:
        return os.stat(path)
    except (OSError, ValueError):
        return None


def is_file(path: str) -> bool:
    st = stat_or_none(path)
    return st is not None and stat.S_ISREG(st.st_mode)


def stat_is_dir(st: os.stat_result) -> bool:
    return stat.S_ISDIR(st.st_mode)


def is_local(target: str) -> bool:
    """True for "." or anything starting with "./"."""
    return target == "." or target.startswith("./")


def is_subpath_key(key: str) -> bool:
    """Subpath keys start with "#" or are local; everything else is a condition."""
    return key.startswith("#") or is_local(key)


def is_absolute_url(value: str) -> bool:
    """
    Check whether value already parses as an absolute URL.

    Covers "https://...", "data:...", "node:fs" and similar. Relative paths,
    bare package names and "#imports" have no scheme.
    """
    try:
        return bool(urlsplit(value).scheme)
    except ValueError:
        return False


def normalizes_to_itself(subpath: str) -> bool:
    """
    Check that a wildcard capture cannot escape its directory.

    Rejects "." and ".." segments and redundant separators. A trailing slash
    is kept, as POSIX normalization in other loaders keeps it.
    """
    segments = subpath.split("/")
    if any(segment in (".", "..") for segment in segments):
        return False
    # Only a single leading or trailing slash may leave an empty segment
    if "" in segments[1:-1]:
        return False
    normalized = posixpath.normpath(subpath)
    if subpath.endswith("/") and normalized != "/":
        normalized += "/"
    return normalized == subpath


def split_suffix(target: str) -> Tuple[str, str]:
    """Split "./a.js?x#y" into ("./a.js", "?x#y")."""
    match = _SUFFIX_SPLIT.match(target)
    return match.group(1), match.group(2)


def file_locator(directory: str, target: str) -> str:
    """
    Build a file: locator for target joined under directory.

    Any ?query or #hash on target is kept verbatim after the encoded path.
    """
    path_part, suffix = split_suffix(target)
    joined = os.path.normpath(os.path.join(directory, path_part.lstrip("/")))
    return "file://" + quote(joined.replace(os.sep, "/")) + suffix
