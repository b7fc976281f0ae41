"""Release source for PEP 503 simple index pages.

The page for a package lists one anchor per distributed file. Versions are
recovered from the filenames, and the optional ``data-requires-python`` and
``data-yanked`` attributes (PEP 503 / PEP 592) are carried along.
"""

import html
import logging
import re
from typing import Optional
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from pypi_releases.models import RawRelease, RegistryStyle, ReleaseListing
from pypi_releases.names import filename_prefix_pattern
from pypi_releases.resolvers.base import ReleaseSource

logger = logging.getLogger(__name__)

SDIST_SUFFIXES = (
    ".tar.gz",
    ".tar.bz2",
    ".tar.xz",
    ".tar.Z",
    ".tar",
    ".tgz",
    ".tbz",
    ".zip",
)

# Built distributions: name-version-<tags...>.ext
BDIST_SUFFIXES = (".whl", ".egg")

_WHITESPACE = re.compile(r"\s+")


def extract_version(filename: str, normalized_name: str) -> Optional[str]:
    """Recover the version from a distribution filename.

    Args:
        filename: Artifact filename, e.g. ``"dj_database_url-0.4.0-py2.py3-none-any.whl"``.
        normalized_name: PEP 503 normalized package name.

    Returns:
        The version token, or None if the file does not belong to the
        package or has no recognized distribution extension.
    """
    match = filename_prefix_pattern(normalized_name).match(filename)
    if match is None:
        return None
    rest = filename[match.end():]

    lowered = rest.lower()
    for suffix in BDIST_SUFFIXES:
        if lowered.endswith(suffix):
            version = rest[: -len(suffix)].split("-", 1)[0]
            return version or None

    for suffix in SDIST_SUFFIXES:
        if lowered.endswith(suffix.lower()):
            version = rest[: -len(suffix)]
            return version or None

    return None


def _anchor_filename(anchor: Tag) -> str:
    text = _WHITESPACE.sub("", anchor.get_text())
    if text:
        return text
    href = anchor.get("href") or ""
    path = urlparse(_WHITESPACE.sub("", str(href))).path
    return unquote(path.rstrip("/").rsplit("/", 1)[-1])


def _requires_python(anchor: Tag) -> Optional[str]:
    value = anchor.get("data-requires-python")
    if not value:
        return None
    # The parser decodes entities once; some indexes double-encode them.
    value = html.unescape(str(value)).strip()
    return value or None


def parse_simple_page(body: str, normalized_name: str) -> ReleaseListing:
    """Extract artifact records from a simple index page.

    Args:
        body: HTML document.
        normalized_name: PEP 503 normalized package name.

    Returns:
        ReleaseListing in document order; empty when no anchor names a
        distribution of the package.
    """
    soup = BeautifulSoup(body, "html.parser")

    releases = []
    for anchor in soup.find_all("a"):
        filename = _anchor_filename(anchor)
        version = extract_version(filename, normalized_name)
        if version is None:
            logger.debug("Skipping anchor %r for %s", filename, normalized_name)
            continue
        releases.append(
            RawRelease(
                version=version,
                yanked=anchor.has_attr("data-yanked"),
                requires_python=_requires_python(anchor),
            )
        )

    return ReleaseListing(releases=releases)


class SimpleIndexSource(ReleaseSource):
    """Source reading the ``/<name>/`` simple index page."""

    style = RegistryStyle.SIMPLE

    @property
    def name(self) -> str:
        return "simple"

    @property
    def accept(self) -> str:
        return "text/html"

    def build_url(self, base_url: str, normalized_name: str) -> str:
        return f"{base_url}{normalized_name}/"

    def parse(self, body: str, normalized_name: str) -> Optional[ReleaseListing]:
        return parse_simple_page(body, normalized_name)
