import base64
from datetime import datetime

import pytest

from mpesa.utils.formatters import (
    basic_auth_header,
    format_timestamp,
    generate_password,
    mask_token,
    normalize_phone_number,
)


class TestNormalizePhoneNumber:

    @pytest.mark.parametrize("raw, expected", [
        ("254712345678", "254712345678"),
        ("+254712345678", "254712345678"),
        ("0712345678", "254712345678"),
        ("712345678", "254712345678"),
        ("0712 345 678", "254712345678"),
        ("  +254 712 345 678 ", "254712345678"),
        (712345678, "254712345678"),
        ("0110123456", "254110123456"),
    ])
    def test_known_formats(self, raw, expected):
        assert normalize_phone_number(raw) == expected

    @pytest.mark.parametrize("raw", ["254712345678", "0712345678", "+254712345678", "712345678"])
    def test_idempotent(self, raw):
        once = normalize_phone_number(raw)
        assert normalize_phone_number(once) == once

    @pytest.mark.parametrize("raw, expected", [
        ("12345", "12345"),
        ("71234567", "71234567"),
        ("812345678", "812345678"),
        ("abc", "abc"),
    ])
    def test_malformed_input_passes_through(self, raw, expected):
        assert normalize_phone_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_input_returned_unchanged(self, raw):
        assert normalize_phone_number(raw) == raw


def test_format_timestamp_is_fourteen_digits():
    assert format_timestamp(datetime(2024, 3, 5, 7, 8, 9)) == "20240305070809"


def test_generate_password():
    password = generate_password("174379", "passkey", "20240305070809")
    assert base64.b64decode(password).decode() == "174379passkey20240305070809"


def test_basic_auth_header():
    header = basic_auth_header("key", "secret")
    assert header.startswith("Basic ")
    assert base64.b64decode(header.split(" ", 1)[1]).decode() == "key:secret"


def test_mask_token_exposes_six_characters():
    assert mask_token("abcdefghijklmnop") == "abcdef..."
