"""Registry configuration.

The default registry list is an explicit value handed to the resolver.
Environment variables are read here, once, by whoever builds the resolver.
"""

import logging
import os
from collections.abc import Iterable, Mapping
from typing import Optional
from urllib.parse import urlparse

from pypi_releases.models import RegistryStyle

logger = logging.getLogger(__name__)

PYPI_JSON_URL = "https://pypi.org/pypi/"
PYPI_SIMPLE_URL = "https://pypi.org/simple/"

DEFAULT_REGISTRY_URLS: tuple[str, ...] = (PYPI_JSON_URL, PYPI_SIMPLE_URL)

# The public registry serves each format under its own path.
PUBLIC_REGISTRY_HOST = "pypi.org"
PUBLIC_ENDPOINT_URLS = {
    RegistryStyle.JSON: PYPI_JSON_URL,
    RegistryStyle.SIMPLE: PYPI_SIMPLE_URL,
}

INDEX_URL_ENV = "PIP_INDEX_URL"


class ConfigurationError(ValueError):
    """Raised when no usable registry configuration can be determined."""


def registry_urls_from_env(environ: Optional[Mapping[str, str]] = None) -> tuple[str, ...]:
    """Return the default registry list, honoring ``PIP_INDEX_URL``.

    Args:
        environ: Mapping to read instead of ``os.environ``.

    Returns:
        A one-element tuple with the environment's index URL when set,
        the built-in public registries otherwise.
    """
    env = os.environ if environ is None else environ
    index_url = env.get(INDEX_URL_ENV, "").strip()
    if index_url:
        logger.debug("Using %s from environment: %s", INDEX_URL_ENV, index_url)
        return (index_url,)
    return DEFAULT_REGISTRY_URLS


def is_valid_registry_url(url: str) -> bool:
    """Check that a registry URL is an absolute http(s) URL."""
    if not isinstance(url, str) or not url.strip():
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def select_registry_urls(
    registry_urls: Optional[Iterable[str]],
    defaults: Iterable[str],
) -> list[str]:
    """Choose the registries to query for one lookup.

    Falls back to ``defaults`` when ``registry_urls`` is empty or None.
    Invalid entries are logged and dropped.

    Args:
        registry_urls: Registries requested by the caller.
        defaults: Configured default registries.

    Returns:
        Registry URLs in query order.

    Raises:
        ConfigurationError: If no valid registry URL remains.
    """
    requested = [url for url in (registry_urls or ()) if url]
    candidates = requested or list(defaults)

    selected = []
    for url in candidates:
        if is_valid_registry_url(url):
            selected.append(url.strip())
        else:
            logger.warning("Ignoring invalid registry URL: %r", url)

    if not selected:
        raise ConfigurationError(
            f"No usable registry URL configured (candidates: {candidates!r})"
        )
    return selected


def endpoint_base_url(base_url: str, style: RegistryStyle) -> str:
    """Return the base URL a source of the given format should query.

    A configured ``https://pypi.org/simple/`` is read through
    ``https://pypi.org/pypi/`` by the JSON source, and the other way round
    for the simple source. Every other registry is queried as configured.

    Args:
        base_url: Registry base URL ending with a slash.
        style: Wire format of the source about to query.

    Returns:
        Base URL ending with a slash.
    """
    parsed = urlparse(base_url)
    if (parsed.hostname or "").lower() != PUBLIC_REGISTRY_HOST:
        return base_url
    if parsed.path.strip("/") not in ("pypi", "simple"):
        return base_url
    return PUBLIC_ENDPOINT_URLS[style]
