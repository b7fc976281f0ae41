"""Merge per-artifact records into one release per version."""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

from pypi_releases.models import RawRelease, Release


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse a registry upload timestamp into an aware UTC datetime.

    Naive timestamps (the legacy ``upload_time`` field) are taken as UTC.

    Args:
        value: Timestamp string such as ``"2017-04-03T16:55:14"`` or
            ``"2017-04-03T16:55:14.123456Z"``.

    Returns:
        The parsed datetime, or None if the value is missing or malformed.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with millisecond precision."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def merge_releases(raw_releases: Iterable[RawRelease]) -> list[Release]:
    """Collapse artifacts sharing a version string into single releases.

    Order follows the first appearance of each version. The release
    timestamp is the earliest upload time among the artifacts, the release
    is deprecated only when every artifact is yanked, and the specifiers of
    all artifacts are kept in first-seen order. Artifacts without a
    specifier are recorded on the release instead of being dropped.

    Args:
        raw_releases: Artifacts in registry order.

    Returns:
        One Release per distinct version string.
    """
    grouped: dict[str, list[RawRelease]] = {}
    for raw in raw_releases:
        grouped.setdefault(raw.version, []).append(raw)

    releases = []
    for version, artifacts in grouped.items():
        upload_times = [a.upload_time for a in artifacts if a.upload_time is not None]
        specifiers: list[str] = []
        for artifact in artifacts:
            if artifact.requires_python and artifact.requires_python not in specifiers:
                specifiers.append(artifact.requires_python)

        releases.append(
            Release(
                version=version,
                release_timestamp=format_timestamp(min(upload_times)) if upload_times else None,
                is_deprecated=all(a.yanked for a in artifacts),
                requires_python=tuple(specifiers),
                has_unconstrained_artifact=any(not a.requires_python for a in artifacts),
            )
        )
    return releases
