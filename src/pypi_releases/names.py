"""Package name normalization.

Registries address packages by their PEP 503 normalized name, and simple
index pages list artifact filenames that may spell the same name with a
different separator or case.
"""

import re
from functools import lru_cache

from packaging.utils import canonicalize_name


def normalize_name(name: str) -> str:
    """Normalize a package name according to PEP 503.

    Lower-cases the name and collapses every run of ``-``, ``_`` and ``.``
    into a single ``-``.

    Args:
        name: Package name as supplied by the caller.

    Returns:
        Normalized name, e.g. ``"not-normalized-package"`` for
        ``"not_normalized.Package"``.
    """
    return str(canonicalize_name(name))


@lru_cache(maxsize=256)
def filename_prefix_pattern(normalized_name: str) -> re.Pattern[str]:
    """Build the regex matching ``<name>-`` at the start of an artifact filename.

    Best-effort: sdists keep the project's own spelling, wheels replace
    separators with ``_``, and some registries mix both, so any run of
    ``-``, ``_`` or ``.`` is accepted between name components and case is
    ignored.

    Args:
        normalized_name: Name already passed through normalize_name().

    Returns:
        Compiled case-insensitive pattern anchored at the filename start.
    """
    parts = [re.escape(part) for part in normalized_name.split("-") if part]
    return re.compile("^" + "[-_.]+".join(parts) + "-", re.IGNORECASE)
