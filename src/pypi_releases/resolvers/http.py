import asyncio
import logging
from typing import Optional

import aiohttp

from pypi_releases.hostrules import HostRules

logger = logging.getLogger(__name__)

# Statuses meaning "this endpoint format is not served here".
UNAVAILABLE_STATUSES = frozenset({403, 404})


class RegistryHttpClient:
    """Transport used by the registry sources.

    Manages a shared aiohttp.ClientSession for connection pooling and reuse
    and turns every failure into a soft ``None`` result. No retries are
    performed.
    """

    def __init__(
        self,
        host_rules: Optional[HostRules] = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            host_rules: Credentials applied to matching request hosts.
            timeout: Total per-request timeout in seconds.
        """
        self.host_rules = host_rules or HostRules()
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session.

        Returns:
            The shared aiohttp ClientSession.
        """
        if self._session is None or self._session.closed:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        """Create a new aiohttp.ClientSession.

        Subclasses can override this to provide custom session configuration.

        Returns:
            A new aiohttp.ClientSession instance.
        """
        connector = aiohttp.TCPConnector(ttl_dns_cache=300)
        return aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )

    async def get_text(self, url: str, accept: str = "*/*") -> Optional[str]:
        """Fetch a URL and return its body.

        Args:
            url: Absolute URL to fetch.
            accept: Value for the Accept header.

        Returns:
            The decoded body for 2xx responses (possibly empty), or None for
            non-2xx statuses and transport errors.
        """
        headers = {"Accept": accept}
        headers.update(self.host_rules.auth_headers(url))
        logger.debug("GET %s", url)

        try:
            session = await self._get_session()
            async with session.get(url, headers=headers) as response:
                if response.status in UNAVAILABLE_STATUSES:
                    logger.debug("%s returned %d", url, response.status)
                    return None
                if not 200 <= response.status < 300:
                    logger.warning("%s returned unexpected status %d", url, response.status)
                    return None
                return await response.text(errors="replace")
        except aiohttp.ClientError as e:
            logger.warning("Network error fetching %s: %s", url, e)
            return None
        except asyncio.TimeoutError:
            logger.warning("Timed out fetching %s", url)
            return None

    async def close(self) -> None:
        """Close the aiohttp session.

        Should be called when done using the client to release resources.
        """
        if self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "RegistryHttpClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
