"""Filter releases by runtime-version compatibility."""

import logging
from functools import lru_cache
from typing import Optional, Union

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from pypi_releases.config import ConfigurationError
from pypi_releases.models import FilteringMode, Release

logger = logging.getLogger(__name__)


def parse_filtering_mode(mode: Union[FilteringMode, str, None]) -> FilteringMode:
    """Coerce a caller-supplied filtering mode.

    Args:
        mode: FilteringMode, its string value, or None for the default.

    Returns:
        The matching FilteringMode.

    Raises:
        ConfigurationError: If the value is not a known mode.
    """
    if mode is None:
        return FilteringMode.NONE
    if isinstance(mode, FilteringMode):
        return mode
    if not isinstance(mode, str):
        raise ConfigurationError(f"Unknown constraints filtering mode: {mode!r}")
    try:
        return FilteringMode(mode.lower())
    except ValueError:
        raise ConfigurationError(f"Unknown constraints filtering mode: {mode!r}") from None


@lru_cache(maxsize=512)
def _parse_specifier(text: str) -> Optional[SpecifierSet]:
    try:
        return SpecifierSet(text)
    except InvalidSpecifier:
        logger.debug("Ignoring unparsable requires_python specifier: %r", text)
        return None


def is_compatible(release: Release, target: Version) -> bool:
    """Check whether any artifact of a release accepts the target version.

    A release with no usable specifier is always compatible, and so is one
    with an artifact that declares no specifier at all.

    Args:
        release: Merged release.
        target: Runtime version to check.

    Returns:
        True if the release should be kept under strict filtering.
    """
    if release.has_unconstrained_artifact:
        return True
    specifiers = [s for s in map(_parse_specifier, release.requires_python) if s is not None]
    if not specifiers:
        return True
    return any(s.contains(target, prereleases=True) for s in specifiers)


def filter_releases(
    releases: list[Release],
    python_version: Optional[str],
    mode: FilteringMode = FilteringMode.NONE,
) -> list[Release]:
    """Apply the constraint filter to a merged release set.

    Only strict mode removes releases. Releases with an artifact that
    declares no specifier are always retained.

    Args:
        releases: Merged releases in registry order.
        python_version: Target runtime version, e.g. ``"2.7"``.
        mode: Filtering mode.

    Returns:
        The releases to report, in registry order.
    """
    if mode is not FilteringMode.STRICT or not python_version:
        return releases

    try:
        target = Version(python_version)
    except InvalidVersion:
        logger.warning(
            "Cannot filter by unparsable python version %r, keeping all releases",
            python_version,
        )
        return releases

    kept = [release for release in releases if is_compatible(release, target)]
    if len(kept) != len(releases):
        logger.debug(
            "Strict filtering for python %s removed %d of %d releases",
            python_version,
            len(releases) - len(kept),
            len(releases),
        )
    return kept
