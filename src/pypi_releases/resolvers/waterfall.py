"""Multi-registry resolver, the public entry point.

This module walks the configured registries in order and returns the
releases of the first registry that has any, after merging per-artifact
records and applying runtime-version constraints.
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional, Union

from pypi_releases.config import registry_urls_from_env, select_registry_urls
from pypi_releases.constraints import filter_releases, parse_filtering_mode
from pypi_releases.hostrules import HostRules
from pypi_releases.models import FilteringMode, LookupSpec, PackageMetadata, RegistryTarget
from pypi_releases.names import normalize_name
from pypi_releases.releases import merge_releases
from pypi_releases.resolvers.http import RegistryHttpClient
from pypi_releases.resolvers.registry import RegistryResolver

logger = logging.getLogger(__name__)


class ReleaseResolver:
    """Resolves package releases across an ordered list of registries.

    Resolution strategy:
    1. Normalize the package name once.
    2. For each registry in order, query its endpoints (see RegistryResolver).
    3. Stop at the first registry with releases; later registries are not
       queried and results are never merged across registries.
    4. Merge artifacts per version and apply the constraint filter.

    Absence of data is reported as None, never as an exception. Only
    configuration problems raise.

    This resolver manages an aiohttp session through its RegistryHttpClient.
    Use as an async context manager or call close() when done.

    Attributes:
        default_registry_urls: Registries used when a lookup names none.
        host_rules: Credential store consulted for the private flag.
        http: Shared transport.
        registry_resolver: Per-registry orchestrator.
    """

    def __init__(
        self,
        default_registry_urls: Optional[Iterable[str]] = None,
        host_rules: Optional[HostRules] = None,
        http_client: Optional[RegistryHttpClient] = None,
        registry_resolver: Optional[RegistryResolver] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            default_registry_urls: Default registries. If not provided, read
                once from the environment via registry_urls_from_env().
            host_rules: Optional credential store. Empty if not provided.
            http_client: Optional custom transport. If not provided, creates
                one using ``host_rules``.
            registry_resolver: Optional custom per-registry orchestrator.
        """
        self.default_registry_urls: tuple[str, ...] = (
            tuple(default_registry_urls)
            if default_registry_urls is not None
            else registry_urls_from_env()
        )
        self.host_rules = host_rules or HostRules()
        self.http = http_client or RegistryHttpClient(host_rules=self.host_rules)
        self.registry_resolver = registry_resolver or RegistryResolver(self.http)

    async def get_releases(
        self,
        package_name: str,
        registry_urls: Optional[Sequence[str]] = None,
        constraints: Optional[Mapping[str, str]] = None,
        constraints_filtering: Union[FilteringMode, str, None] = None,
    ) -> Optional[PackageMetadata]:
        """Resolve the releases of a package.

        Args:
            package_name: Package name in any spelling.
            registry_urls: Ordered registries; empty or None uses the defaults.
            constraints: Constraint map such as ``{"python": "2.7"}``.
            constraints_filtering: ``"strict"`` to drop incompatible releases.

        Returns:
            PackageMetadata from the first registry with releases, or None.

        Raises:
            ConfigurationError: If no usable registry is configured or the
                filtering mode is unknown.
        """
        spec = LookupSpec(
            name=package_name,
            registry_urls=tuple(registry_urls or ()),
            python_version=(constraints or {}).get("python"),
            constraints_filtering=parse_filtering_mode(constraints_filtering),
        )
        return await self.resolve(spec)

    async def resolve(self, spec: LookupSpec) -> Optional[PackageMetadata]:
        """Resolve the releases described by a LookupSpec.

        Args:
            spec: Lookup specification.

        Returns:
            PackageMetadata, or None if no registry has releases.

        Raises:
            ConfigurationError: If no usable registry is configured.
        """
        registry_urls = select_registry_urls(spec.registry_urls, self.default_registry_urls)
        mode = parse_filtering_mode(spec.constraints_filtering)
        normalized_name = normalize_name(spec.name)
        logger.debug(
            "Resolving %s (as %s) across %d registries",
            spec.name,
            normalized_name,
            len(registry_urls),
        )

        for registry_url in registry_urls:
            target = RegistryTarget.from_url(registry_url)
            listing = await self.registry_resolver.query(target, normalized_name)
            if listing is None:
                logger.debug("Registry %s has no releases for %s", registry_url, normalized_name)
                continue

            releases = merge_releases(listing.releases)
            metadata = PackageMetadata(
                registry_url=registry_url,
                releases=filter_releases(releases, spec.python_version, mode),
                is_private=self.host_rules.has_credentials(registry_url),
                homepage=listing.homepage,
                source_url=listing.source_url,
                changelog_url=listing.changelog_url,
            )
            logger.debug(
                "Resolved %d releases for %s from %s",
                len(metadata.releases),
                normalized_name,
                registry_url,
            )
            return metadata

        logger.debug("No registry returned releases for %s", normalized_name)
        return None

    async def resolve_batch(
        self, specs: list[LookupSpec]
    ) -> dict[LookupSpec, Optional[PackageMetadata]]:
        """Resolve multiple independent lookups concurrently.

        Uses asyncio.gather, with exception handling to ensure partial
        failures don't stop the entire batch.

        Args:
            specs: Lookup specifications.

        Returns:
            Dictionary mapping each spec to its PackageMetadata (or None if
            nothing was found or the lookup failed).
        """
        logger.info("Starting batch resolution of %d packages", len(specs))

        results = await asyncio.gather(
            *(self.resolve(spec) for spec in specs), return_exceptions=True
        )

        result_dict: dict[LookupSpec, Optional[PackageMetadata]] = {}
        for spec, result in zip(specs, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error("Exception resolving %s: %s", spec.name, result)
                result_dict[spec] = None
            else:
                result_dict[spec] = result

        found = sum(1 for metadata in result_dict.values() if metadata is not None)
        logger.info("Batch resolution complete: %d/%d found", found, len(specs))
        return result_dict

    async def close(self) -> None:
        """Close the HTTP session."""
        await self.http.close()

    async def __aenter__(self) -> "ReleaseResolver":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
