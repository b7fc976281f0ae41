"""Core data models for pypi_releases.

This module defines the records passed between the registry sources, the
merge step and the constraint filter, plus the final result returned to
callers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from urllib.parse import urlparse


class RegistryStyle(str, Enum):
    """Wire format a registry URL is expected to speak first."""

    JSON = "json"
    SIMPLE = "simple"


class FilteringMode(str, Enum):
    """How runtime-version constraints are applied to releases."""

    NONE = "none"
    STRICT = "strict"


@dataclass(frozen=True)
class RegistryTarget:
    """A configured registry base URL and its inferred style.

    Attributes:
        url: Registry URL exactly as configured.
        style: SIMPLE when a path segment is ``simple`` or ``+simple``,
            JSON otherwise.
    """

    url: str
    style: RegistryStyle

    @classmethod
    def from_url(cls, url: str) -> "RegistryTarget":
        """Classify a registry URL by its path shape."""
        segments = [s for s in urlparse(url).path.split("/") if s]
        if any(s in ("simple", "+simple") for s in segments):
            return cls(url=url, style=RegistryStyle.SIMPLE)
        return cls(url=url, style=RegistryStyle.JSON)

    @property
    def base_url(self) -> str:
        """Return the URL with exactly one trailing slash."""
        return self.url.rstrip("/") + "/"


@dataclass(frozen=True)
class RawRelease:
    """One distributed artifact of a version, as reported by a registry.

    Attributes:
        version: Version string as given by the source (not validated).
        upload_time: Upload timestamp in UTC, if reported.
        yanked: True if the registry marks this artifact as yanked.
        requires_python: Raw ``requires_python`` specifier, if declared.
    """

    version: str
    upload_time: Optional[datetime] = None
    yanked: bool = False
    requires_python: Optional[str] = None


@dataclass
class ReleaseListing:
    """Everything one endpoint returned for a package.

    Attributes:
        releases: Artifacts in registry order, possibly several per version.
        homepage: Optional homepage URL.
        source_url: Optional source repository URL.
        changelog_url: Optional changelog URL.
    """

    releases: list[RawRelease] = field(default_factory=list)
    homepage: Optional[str] = None
    source_url: Optional[str] = None
    changelog_url: Optional[str] = None


@dataclass
class Release:
    """A single installable version after merging its artifacts.

    Attributes:
        version: Version string.
        release_timestamp: Earliest artifact upload time as ISO-8601 UTC.
        is_deprecated: True only if every artifact of the version is yanked.
        requires_python: Distinct specifiers declared by the artifacts.
        has_unconstrained_artifact: True if some artifact declares no
            specifier, so it installs on any runtime.
    """

    version: str
    release_timestamp: Optional[str] = None
    is_deprecated: bool = False
    requires_python: tuple[str, ...] = ()
    has_unconstrained_artifact: bool = False


@dataclass
class PackageMetadata:
    """Resolution result for one package.

    Attributes:
        registry_url: Registry that produced the releases, as configured.
        releases: Releases in registry-declared order.
        is_private: True if stored credentials exist for the registry host.
        homepage: Optional homepage URL.
        source_url: Optional source repository URL.
        changelog_url: Optional changelog URL.
    """

    registry_url: str
    releases: list[Release] = field(default_factory=list)
    is_private: bool = False
    homepage: Optional[str] = None
    source_url: Optional[str] = None
    changelog_url: Optional[str] = None

    @property
    def versions(self) -> list[str]:
        """Return the release versions in order."""
        return [release.version for release in self.releases]


@dataclass(frozen=True)
class LookupSpec:
    """Immutable description of a single release lookup.

    Frozen for hashability so batch results can be keyed by spec.

    Attributes:
        name: Package name as supplied by the caller.
        registry_urls: Ordered registry URLs; empty means the defaults.
        python_version: Target runtime version used for filtering.
        constraints_filtering: Filtering mode.
    """

    name: str
    registry_urls: tuple[str, ...] = ()
    python_version: Optional[str] = None
    constraints_filtering: FilteringMode = FilteringMode.NONE
