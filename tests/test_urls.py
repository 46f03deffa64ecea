import httpx
import pytest

from cloudinary_api.core.urls import REDACTED, sanitize_url, scrub


@pytest.mark.parametrize(
    "url, expected",
    [
        (
            "https://api.example.com/v1/a?client_secret=shh",
            "https://api.example.com/v1/a?client_secret=REDACTED",
        ),
        (
            "https://api.example.com/v1/a?b=2&client_secret=shh&a=1",
            "https://api.example.com/v1/a?b=2&client_secret=REDACTED&a=1",
        ),
        (
            "https://api.example.com/v1/a?q=x%20y&api_secret=shh#frag",
            "https://api.example.com/v1/a?q=x%20y&api_secret=REDACTED#frag",
        ),
    ],
)
def test_sanitize_url_redacts_only_the_secret(url, expected):
    assert sanitize_url(url) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://api.example.com/v1/a",
        "https://api.example.com/v1/a?b=2&a=1",
        "https://api.example.com/v1/a?client_secret=",
        "https://api.example.com/v1/a?client_secretish=shh",
    ],
)
def test_sanitize_url_leaves_other_urls_untouched(url):
    assert sanitize_url(url) == url


def test_sanitize_url_is_idempotent():
    once = sanitize_url("https://api.example.com/a?client_secret=shh&x=1")
    assert sanitize_url(once) == once
    assert REDACTED in once


def test_sanitize_url_accepts_httpx_urls():
    url = httpx.URL("https://api.example.com/a", params={"client_secret": "shh", "x": "1"})
    assert sanitize_url(url) == "https://api.example.com/a?client_secret=REDACTED&x=1"


def test_sanitize_url_none():
    assert sanitize_url(None) == ""


def test_scrub_removes_secret_values():
    assert scrub("token shh leaked", ("shh",)) == "token REDACTED leaked"
    assert scrub("nothing here", ("",)) == "nothing here"


def test_sanitize_url_redacts_unparseable_urls():
    out = sanitize_url("https://[api.example.com/a?client_secret=shh&page=2&api_secret=s2")
    assert out == "https://[api.example.com/a?client_secret=REDACTED&page=2&api_secret=REDACTED"
    assert "shh" not in out
