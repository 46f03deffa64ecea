import hashlib
import time
from collections.abc import Callable, Mapping
from typing import Any

Clock = Callable[[], float]

UNSIGNED_PARAMS = frozenset({"file", "api_key", "resource_type", "cloud_name"})


def to_form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def current_timestamp(clock: Clock = time.time) -> int:
    return int(clock())


def string_to_sign(params: Mapping[str, Any]) -> str:
    pairs = [
        f"{key}={to_form_value(value)}"
        for key, value in sorted(params.items())
        if key not in UNSIGNED_PARAMS and value is not None and value != ""
    ]
    return "&".join(pairs)


def sign_params(params: Mapping[str, Any], api_secret: str) -> str:
    """Compute the request signature for ``params``.

    The timestamp must already be part of ``params``; it is bound to the
    secret through the digest, so the secret itself is never sent.
    """
    payload = string_to_sign(params) + api_secret
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


def signed_params(
    params: Mapping[str, Any],
    *,
    api_key: str,
    api_secret: str,
    clock: Clock = time.time,
) -> dict[str, Any]:
    """Return a copy of ``params`` stamped with a fresh timestamp and signed."""
    stamped = dict(params)
    stamped["timestamp"] = current_timestamp(clock)
    stamped["signature"] = sign_params(stamped, api_secret)
    stamped["api_key"] = api_key
    return stamped
