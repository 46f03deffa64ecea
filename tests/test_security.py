import hashlib

from cloudinary_api.core.security import (
    current_timestamp,
    sign_params,
    signed_params,
    string_to_sign,
    to_form_value,
)


def test_form_values():
    assert to_form_value(True) == "true"
    assert to_form_value(False) == "false"
    assert to_form_value(0.5) == "0.5"
    assert to_form_value("a&b") == "a&b"


def test_string_to_sign_skips_unsigned_and_empty_params():
    params = {
        "upload_preset": "p",
        "timestamp": 1,
        "file": "https://example.com/cat.png",
        "api_key": "abc",
        "resource_type": "image",
        "eager_async": True,
        "public_id": "",
        "folder": None,
    }
    assert string_to_sign(params) == "eager_async=true&timestamp=1&upload_preset=p"


def test_sign_params_binds_secret():
    params = {"timestamp": 1700000000, "upload_preset": "p"}
    expected = hashlib.sha1(b"timestamp=1700000000&upload_preset=pshh").hexdigest()
    assert sign_params(params, "shh") == expected
    assert sign_params(params, "other") != expected


def test_signed_params_stamps_fresh_timestamp_without_mutating_input():
    params = {"upload_preset": "p", "timestamp": 5}
    signed = signed_params(params, api_key="abc", api_secret="shh", clock=lambda: 42.9)

    assert params == {"upload_preset": "p", "timestamp": 5}
    assert signed["timestamp"] == 42
    assert signed["api_key"] == "abc"
    assert signed["signature"] == sign_params({"upload_preset": "p", "timestamp": 42}, "shh")
    assert "shh" not in signed.values()


def test_current_timestamp_truncates_to_seconds():
    assert current_timestamp(lambda: 1700000000.99) == 1700000000
