"""Release source for the PyPI JSON API.

Fetches ``<registry>/<name>/json`` and extracts the per-artifact release
records along with the homepage, source repository and changelog links
from the package metadata.
"""

import json
import logging
import re
from typing import Any, Optional
from urllib.parse import urlparse

from pypi_releases.models import RawRelease, RegistryStyle, ReleaseListing
from pypi_releases.releases import parse_timestamp
from pypi_releases.resolvers.base import ReleaseSource

logger = logging.getLogger(__name__)

GITHUB_REPO_PATTERN = re.compile(r"^https?://github\.com/[^\\/]+/[^\\/]+/?$")

SOURCE_KEYS = frozenset({"code", "source", "source code"})

CHANGELOG_KEYS = frozenset(
    {
        "changelog",
        "change log",
        "changes",
        "release notes",
        "news",
        "what's new",
        "history",
    }
)


def _is_sponsorship_url(url: str) -> bool:
    path = urlparse(url).path.lower()
    return "/sponsors/" in path or path == "/sponsors" or path.startswith("/sponsors/")


def extract_source_url(project_urls: dict[str, Any]) -> Optional[str]:
    """Pick the source repository URL from ``project_urls``.

    Keys are compared case-insensitively. Sponsorship pages are never
    returned, even when nothing else is available.

    Args:
        project_urls: Label to URL mapping from the package metadata.

    Returns:
        Repository URL if found, None otherwise.
    """
    for label, url in project_urls.items():
        if not isinstance(url, str) or not url:
            continue
        key = str(label).strip().lower()
        if not (key.startswith("repo") or key in SOURCE_KEYS or GITHUB_REPO_PATTERN.match(url)):
            continue
        if _is_sponsorship_url(url):
            logger.debug("Skipping sponsorship link %s", url)
            continue
        return url
    return None


def extract_changelog_url(project_urls: dict[str, Any]) -> Optional[str]:
    """Pick the changelog URL from ``project_urls``."""
    for label, url in project_urls.items():
        if isinstance(url, str) and url and str(label).strip().lower() in CHANGELOG_KEYS:
            return url
    return None


def _extract_homepage(info: dict[str, Any], project_urls: dict[str, Any]) -> Optional[str]:
    home_page = info.get("home_page")
    if isinstance(home_page, str) and home_page:
        return home_page
    for label, url in project_urls.items():
        if str(label).strip().lower() == "homepage" and isinstance(url, str) and url:
            return url
    return None


def _parse_artifact(version: str, artifact: dict[str, Any]) -> RawRelease:
    requires_python = artifact.get("requires_python")
    upload_time = parse_timestamp(artifact.get("upload_time_iso_8601")) or parse_timestamp(
        artifact.get("upload_time")
    )
    return RawRelease(
        version=version,
        upload_time=upload_time,
        yanked=bool(artifact.get("yanked")),
        requires_python=requires_python.strip()
        if isinstance(requires_python, str) and requires_python.strip()
        else None,
    )


def parse_json_document(data: Any) -> Optional[ReleaseListing]:
    """Convert a decoded JSON API document into a ReleaseListing.

    Versions with an empty artifact list produce no records, which drops
    them from the merged result.

    Args:
        data: Decoded JSON body.

    Returns:
        ReleaseListing, or None if the document is not shaped like a JSON
        API response.
    """
    if not isinstance(data, dict):
        return None

    info = data.get("info")
    info = info if isinstance(info, dict) else {}
    project_urls = info.get("project_urls")
    project_urls = project_urls if isinstance(project_urls, dict) else {}

    releases = data.get("releases")
    if releases is not None and not isinstance(releases, dict):
        logger.warning("Ignoring malformed releases mapping of type %s", type(releases).__name__)
        return None

    raw_releases = []
    for version, artifacts in (releases or {}).items():
        if not isinstance(artifacts, list):
            continue
        for artifact in artifacts:
            if isinstance(artifact, dict):
                raw_releases.append(_parse_artifact(str(version), artifact))

    return ReleaseListing(
        releases=raw_releases,
        homepage=_extract_homepage(info, project_urls),
        source_url=extract_source_url(project_urls),
        changelog_url=extract_changelog_url(project_urls),
    )


class JsonApiSource(ReleaseSource):
    """Source reading the ``/<name>/json`` endpoint."""

    style = RegistryStyle.JSON

    @property
    def name(self) -> str:
        return "json"

    @property
    def accept(self) -> str:
        return "application/json"

    def build_url(self, base_url: str, normalized_name: str) -> str:
        return f"{base_url}{normalized_name}/json"

    def parse(self, body: str, normalized_name: str) -> Optional[ReleaseListing]:
        try:
            data = json.loads(body)
        except ValueError as e:
            logger.warning("Failed to parse JSON response for %s: %s", normalized_name, e)
            return None
        return parse_json_document(data)
