"""pypi-releases - Resolve published releases from PyPI-compatible registries.

This package looks up the installable versions of a package on one or more
registries, through either the JSON API or the PEP 503 simple index, and
returns them together with the package's descriptive links.
"""

__version__ = "0.1.0"
__author__ = "forkrul"

from pypi_releases.config import ConfigurationError
from pypi_releases.hostrules import HostRule, HostRules
from pypi_releases.models import (
    FilteringMode,
    LookupSpec,
    PackageMetadata,
    Release,
)
from pypi_releases.names import normalize_name
from pypi_releases.resolvers import ReleaseResolver

__all__ = [
    "__version__",
    "ConfigurationError",
    "FilteringMode",
    "HostRule",
    "HostRules",
    "LookupSpec",
    "PackageMetadata",
    "Release",
    "ReleaseResolver",
    "normalize_name",
]
