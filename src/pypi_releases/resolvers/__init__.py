"""Registry resolvers for fetching release listings.

This module provides the JSON API and simple index sources, the
per-registry orchestrator and the multi-registry entry point.
"""

from pypi_releases.resolvers.base import ReleaseSource
from pypi_releases.resolvers.http import RegistryHttpClient
from pypi_releases.resolvers.json_api import JsonApiSource
from pypi_releases.resolvers.registry import RegistryResolver
from pypi_releases.resolvers.simple import SimpleIndexSource
from pypi_releases.resolvers.waterfall import ReleaseResolver

__all__ = [
    "ReleaseSource",
    "RegistryHttpClient",
    "JsonApiSource",
    "RegistryResolver",
    "SimpleIndexSource",
    "ReleaseResolver",
]
