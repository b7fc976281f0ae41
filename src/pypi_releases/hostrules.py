"""Read-only store of per-host registry credentials.

Rules are built once and only read afterwards, so a single store can be
shared by concurrent lookups.
"""

import base64
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse


@dataclass(frozen=True)
class HostRule:
    """Credentials for a registry host.

    Attributes:
        match_host: Host name; also matches its subdomains.
        token: Optional bearer token.
        username: Optional basic-auth user name.
        password: Optional basic-auth password.
    """

    match_host: str
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.token or self.username or self.password)

    def matches(self, host: str) -> bool:
        """Return True if the rule applies to ``host``."""
        rule_host = self.match_host.lower().strip(".")
        host = host.lower()
        return host == rule_host or host.endswith("." + rule_host)


class HostRules:
    """Lookup of host rules by registry or request URL."""

    def __init__(self, rules: Optional[Iterable[HostRule]] = None) -> None:
        # Longest host first so the most specific rule wins.
        self._rules: tuple[HostRule, ...] = tuple(
            sorted(rules or (), key=lambda r: len(r.match_host), reverse=True)
        )

    def find(self, url: str) -> Optional[HostRule]:
        """Return the most specific rule for the URL's host, if any."""
        host = urlparse(url).hostname
        if not host:
            return None
        for rule in self._rules:
            if rule.matches(host):
                return rule
        return None

    def has_credentials(self, url: str) -> bool:
        """Check whether credentials are stored for the URL's host."""
        rule = self.find(url)
        return rule is not None and rule.has_credentials

    def auth_headers(self, url: str) -> dict[str, str]:
        """Build the Authorization header for a request to ``url``.

        Returns:
            A header dict, empty when no credentials apply.
        """
        rule = self.find(url)
        if rule is None:
            return {}
        if rule.token:
            return {"Authorization": f"Bearer {rule.token}"}
        if rule.username or rule.password:
            raw = f"{rule.username or ''}:{rule.password or ''}".encode()
            return {"Authorization": "Basic " + base64.b64encode(raw).decode("ascii")}
        return {}
