"""Tests for the host rule credential store."""

import base64

from pypi_releases.hostrules import HostRule, HostRules


def test_token_rule_marks_host_private() -> None:
    """A token for the registry host means stored credentials."""
    rules = HostRules([HostRule(match_host="customprivate.pypi.net", token="123test")])
    assert rules.has_credentials("https://customprivate.pypi.net/foo")
    assert not rules.has_credentials("https://custom.pypi.net/foo")


def test_rule_matches_subdomains() -> None:
    """A rule for a domain also applies to its subdomains."""
    rules = HostRules([HostRule(match_host="registry.org", token="t")])
    assert rules.has_credentials("https://some.private.registry.org/+simple/")
    assert not rules.has_credentials("https://notregistry.org/simple/")


def test_rule_without_credentials() -> None:
    """A rule carrying no secret does not make a host private."""
    rules = HostRules([HostRule(match_host="pypi.org")])
    assert rules.find("https://pypi.org/simple/") is not None
    assert not rules.has_credentials("https://pypi.org/simple/")
    assert rules.auth_headers("https://pypi.org/simple/") == {}


def test_most_specific_rule_wins() -> None:
    """Longer host matches are preferred."""
    rules = HostRules(
        [
            HostRule(match_host="example.com", token="outer"),
            HostRule(match_host="pypi.example.com", token="inner"),
        ]
    )
    assert rules.auth_headers("https://pypi.example.com/simple/") == {
        "Authorization": "Bearer inner"
    }


def test_basic_auth_header() -> None:
    """User name and password produce a Basic header."""
    rules = HostRules([HostRule(match_host="pypi.example.com", username="user", password="pw")])
    expected = base64.b64encode(b"user:pw").decode("ascii")
    assert rules.auth_headers("https://pypi.example.com/") == {
        "Authorization": f"Basic {expected}"
    }


def test_empty_store() -> None:
    """No rules means no credentials anywhere."""
    rules = HostRules()
    assert rules.auth_headers("https://pypi.org/pypi/") == {}
    assert not rules.has_credentials("https://pypi.org/pypi/")
    assert rules.find("not a url") is None
