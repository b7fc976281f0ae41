"""Base interface for registry release sources.

A source speaks one wire format (JSON API or simple index) and turns a
registry response into a ReleaseListing. The orchestrator only relies on
this interface, so fallback between formats does not depend on parsing
details.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from pypi_releases.models import RegistryStyle, ReleaseListing
from pypi_releases.resolvers.http import RegistryHttpClient

logger = logging.getLogger(__name__)


class ReleaseSource(ABC):
    """Abstract base class for one registry endpoint format.

    Attributes:
        style: Wire format this source speaks.
        http: Transport shared with the other sources.
    """

    style: RegistryStyle

    def __init__(self, http: RegistryHttpClient) -> None:
        """Initialize with the transport to fetch through.

        Args:
            http: Shared registry HTTP client.
        """
        self.http = http

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the source name for logging/debugging.

        Returns:
            Name like "json" or "simple".
        """
        ...

    @abstractmethod
    def build_url(self, base_url: str, normalized_name: str) -> str:
        """Return the endpoint URL for a package on a registry.

        Args:
            base_url: Registry base URL ending with a slash.
            normalized_name: PEP 503 normalized package name.
        """
        ...

    @abstractmethod
    def parse(self, body: str, normalized_name: str) -> Optional[ReleaseListing]:
        """Parse a response body.

        Args:
            body: Response body of a successful request.
            normalized_name: PEP 503 normalized package name.

        Returns:
            ReleaseListing, or None if the body holds no usable data.
        """
        ...

    async def query(self, base_url: str, normalized_name: str) -> Optional[ReleaseListing]:
        """Fetch and parse the endpoint for a package.

        Args:
            base_url: Registry base URL ending with a slash.
            normalized_name: PEP 503 normalized package name.

        Returns:
            ReleaseListing with at least one release, or None when this
            format is unavailable or yields nothing.
        """
        url = self.build_url(base_url, normalized_name)
        body = await self.http.get_text(url, accept=self.accept)
        if body is None:
            return None
        if not body.strip():
            logger.debug("Empty %s response from %s", self.name, url)
            return None

        listing = self.parse(body, normalized_name)
        if listing is None or not listing.releases:
            logger.debug("No releases in %s response from %s", self.name, url)
            return None
        return listing

    @property
    def accept(self) -> str:
        """Return the Accept header sent with requests."""
        return "*/*"
