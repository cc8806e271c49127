"""Unit tests for the CORS origin decision."""

from edclub.middleware.cors import resolve_cors_origin

ALLOWED = ["https://app.edclub.dev", "http://localhost:3000"]


def test_allowed_origin_is_echoed_with_credentials():
    assert resolve_cors_origin("https://app.edclub.dev", ALLOWED) == ("https://app.edclub.dev", True)


def test_unknown_origin_gets_wildcard_without_credentials():
    assert resolve_cors_origin("https://other.example", ALLOWED) == ("*", False)


def test_missing_origin():
    assert resolve_cors_origin(None, ALLOWED) == ("*", False)


def test_empty_allow_list():
    assert resolve_cors_origin("https://app.edclub.dev", []) == ("*", False)


def test_wildcard_allow_list_never_grants_credentials():
    assert resolve_cors_origin("https://app.edclub.dev", ["*"]) == ("*", False)
