"""Pytest configuration and fixtures."""

import copy
from collections.abc import Callable
from typing import Any

import pytest
from aioresponses import aioresponses

JSON_BASE_URL = "https://pypi.org/pypi/"
SIMPLE_BASE_URL = "https://pypi.org/simple/"

_AZURE_CLI_MONITOR = {
    "info": {
        "name": "azure-cli-monitor",
        "home_page": "https://github.com/Azure/azure-cli",
        "project_urls": {
            "Homepage": "https://github.com/Azure/azure-cli",
            "Source": "https://github.com/Azure/azure-cli",
            "Changelog": "https://github.com/Azure/azure-cli/blob/dev/HISTORY.rst",
        },
    },
    "releases": {
        "0.0.1": [
            {
                "upload_time": "2017-04-03T16:55:14",
                "requires_python": None,
                "yanked": False,
            }
        ],
        "0.0.2": [
            {
                "upload_time": "2017-04-17T20:32:30",
                "upload_time_iso_8601": "2017-04-17T20:32:30.512345Z",
                "requires_python": ">=2.7",
                "yanked": False,
            },
            {
                "upload_time": "2017-04-17T20:30:00",
                "requires_python": ">=2.7",
                "yanked": False,
            },
        ],
        "0.1.6": [
            {"upload_time": "2018-05-07T17:59:09", "yanked": True},
            {"upload_time": "2018-05-07T18:01:00", "yanked": True},
        ],
        "0.1.7": [
            {"upload_time": "2018-05-22T17:25:23", "yanked": True},
            {"upload_time": "2018-05-22T17:25:24", "yanked": False},
        ],
        "0.2.0": [],
    },
}

_DOIT = {
    "info": {"name": "doit"},
    "releases": {
        "0.30.3": [{"requires_python": None}],
        "0.31.0": [{"requires_python": ">=3.4"}, {"requires_python": ">=2.7"}],
        "0.31.1": [{"requires_python": ">=3.4"}],
        "0.4.0": [{"requires_python": ">=3.4"}, {"requires_python": None}],
        "0.4.1": [],
    },
}

SIMPLE_PAGE = """<!DOCTYPE html>
<html>
  <head><title>Links for dj-database-url</title></head>
  <body>
    <h1>Links for dj-database-url</h1>
    <a href="../../packages/dj-database-url-0.1.2.tar.gz#sha256=aa">dj-database-url-0.1.2.tar.gz</a><br/>
    <a href="../../packages/dj_database_url-0.1.2-py2.py3-none-any.whl#sha256=bb">dj_database_url-0.1.2-py2.py3-none-any.whl</a><br/>
    <a href="../../packages/dj-database-url-0.2.0.tar.gz" data-requires-python="&gt;=3.4">dj-database-url-0.2.0.tar.gz</a><br/>
    <a href="../../packages/dj_database_url-0.2.0-py3-none-any.whl" data-requires-python="&gt;=3.4">dj_database_url-0.2.0-py3-none-any.whl</a><br/>
    <a href="../../packages/dj-database-url-0.3.0.tar.gz" data-requires-python="&gt;=3.4">dj-database-url-0.3.0.tar.gz</a><br/>
    <a href="../../packages/dj_database_url-0.3.0-py2-none-any.whl" data-requires-python="&gt;=2.7">dj_database_url-0.3.0-py2-none-any.whl</a><br/>
    <a href="../../packages/DJ.Database.URL-0.4.0.zip" data-requires-python="&amp;gt;=3.6">
      DJ.Database.URL-0.4.0.zip
    </a><br/>
    <a href="../../packages/dj-database-url-0.5.0.tar.gz" data-yanked="">dj-database-url-0.5.0.tar.gz</a><br/>
    <a href="../../packages/dj_database_url-0.5.0-py2.py3-none-any.whl" data-yanked="broken metadata">dj_database_url-0.5.0-py2.py3-none-any.whl</a><br/>
    <a href="../../packages/dj-database-url-0.6.0.tar.gz" data-yanked>dj-database-url-0.6.0.tar.gz</a><br/>
    <a href="../../packages/dj_database_url-0.6.0-py2.py3-none-any.whl">dj_database_url-0.6.0-py2.py3-none-any.whl</a><br/>
    <a href="../../packages/dj-database-url-0.7.0.exe">dj-database-url-0.7.0.exe</a><br/>
    <a href="../../packages/other-package-1.0.0.tar.gz">other-package-1.0.0.tar.gz</a><br/>
  </body>
</html>
"""

SIMPLE_PAGE_WITHOUT_FILES = """<!DOCTYPE html>
<html>
  <body>
    <h1>Links for dj-database-url</h1>
    <a href="https://example.com/">Project page</a>
    <p>Nothing to download here.</p>
  </body>
</html>
"""


@pytest.fixture
def azure_payload() -> dict[str, Any]:
    """Return a JSON API document for azure-cli-monitor."""
    return copy.deepcopy(_AZURE_CLI_MONITOR)


@pytest.fixture
def doit_payload() -> dict[str, Any]:
    """Return a JSON API document with per-artifact requires_python."""
    return copy.deepcopy(_DOIT)


@pytest.fixture
def simple_page() -> str:
    """Return a simple index page for dj-database-url."""
    return SIMPLE_PAGE


@pytest.fixture
def simple_page_without_files() -> str:
    """Return a simple index page without any distribution anchors."""
    return SIMPLE_PAGE_WITHOUT_FILES


@pytest.fixture
def mock_http():
    """Mock all aiohttp traffic; unregistered URLs fail to connect."""
    with aioresponses() as mock:
        yield mock


@pytest.fixture
def was_requested(mock_http: aioresponses) -> Callable[[str], bool]:
    """Return a predicate telling whether a URL was fetched."""

    def _was_requested(url: str) -> bool:
        return any(str(requested_url) == url for _, requested_url in mock_http.requests)

    return _was_requested
