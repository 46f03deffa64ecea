import re
from urllib.parse import unquote_plus, urlsplit, urlunsplit

import httpx

SECRET_QUERY_PARAMS: frozenset[str] = frozenset({"client_secret", "api_secret"})
REDACTED = "REDACTED"

_SECRET_PAIR = re.compile(
    r"(?P<key>(?:^|[?&])(?:%s)=)[^&#]+" % "|".join(sorted(SECRET_QUERY_PARAMS))
)


def _redact_pair(pair: str) -> str:
    key, sep, value = pair.partition("=")
    if sep and value and unquote_plus(key) in SECRET_QUERY_PARAMS:
        return f"{key}={REDACTED}"
    return pair


def sanitize_url(url: str | httpx.URL | None) -> str:
    """Redact secret query parameters from a URL before it reaches logs or errors.

    Only the secret values are rewritten; every other parameter keeps its
    position and original encoding.
    """
    if url is None:
        return ""
    raw = str(url)
    try:
        parts = urlsplit(raw)
    except ValueError:
        # Unparseable URLs still pass through error messages.
        return _SECRET_PAIR.sub(rf"\g<key>{REDACTED}", raw)
    if not parts.query:
        return raw

    query = "&".join(_redact_pair(pair) for pair in parts.query.split("&"))
    if query == parts.query:
        return raw
    return urlunsplit(parts._replace(query=query))


def scrub(text: str, secrets: tuple[str, ...]) -> str:
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text
