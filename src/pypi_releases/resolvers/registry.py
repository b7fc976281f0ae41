"""Query one registry through its endpoint formats in order."""

import logging
from typing import Optional

from pypi_releases.config import endpoint_base_url
from pypi_releases.models import RegistryStyle, RegistryTarget, ReleaseListing
from pypi_releases.resolvers.base import ReleaseSource
from pypi_releases.resolvers.http import RegistryHttpClient
from pypi_releases.resolvers.json_api import JsonApiSource
from pypi_releases.resolvers.simple import SimpleIndexSource

logger = logging.getLogger(__name__)


class RegistryResolver:
    """Decides which endpoint formats to try for a registry, and in which order.

    Simple-style registries are queried through the simple index first and
    the JSON API second; every other registry the other way round. The
    second source is only called when the first yields no releases. On the
    public registry each source is pointed at the path serving its format.

    Attributes:
        json_source: Source for the JSON API.
        simple_source: Source for the simple index.
    """

    def __init__(
        self,
        http: RegistryHttpClient,
        json_source: Optional[ReleaseSource] = None,
        simple_source: Optional[ReleaseSource] = None,
    ) -> None:
        """Initialize with the shared transport and optional custom sources.

        Args:
            http: Shared registry HTTP client.
            json_source: Optional custom JSON source. Defaults to JsonApiSource.
            simple_source: Optional custom simple index source. Defaults to
                SimpleIndexSource.
        """
        self.json_source = json_source or JsonApiSource(http)
        self.simple_source = simple_source or SimpleIndexSource(http)

    def sources_for(self, target: RegistryTarget) -> tuple[ReleaseSource, ReleaseSource]:
        """Return the sources to try for a registry, in query order."""
        if target.style is RegistryStyle.SIMPLE:
            return self.simple_source, self.json_source
        return self.json_source, self.simple_source

    async def query(self, target: RegistryTarget, normalized_name: str) -> Optional[ReleaseListing]:
        """Look up a package on one registry.

        Args:
            target: Classified registry.
            normalized_name: PEP 503 normalized package name.

        Returns:
            The first ReleaseListing with releases, or None if neither
            endpoint format produced any.
        """
        for source in self.sources_for(target):
            base_url = endpoint_base_url(target.base_url, source.style)
            listing = await source.query(base_url, normalized_name)
            if listing is not None:
                logger.debug(
                    "Found %d artifacts for %s via %s endpoint of %s",
                    len(listing.releases),
                    normalized_name,
                    source.name,
                    target.url,
                )
                return listing
            logger.debug(
                "%s endpoint of %s has no data for %s", source.name, target.url, normalized_name
            )
        return None
