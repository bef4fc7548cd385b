"""Tests for trustev.auth.digest -- token-request signatures and timestamps."""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone

import pytest

from trustev.auth.digest import digest, format_timestamp, sha256_hex


TS = "2024-01-01T00:00:00.000Z"
KNOWN_DIGEST = "97f97dc1e9338f559d8ca506576ab5870931b1e6b2c62131b3e0da7b62864ff1"


class TestDigest:
    def test_known_answer(self) -> None:
        assert digest("s3cr3t", "alice", TS) == KNOWN_DIGEST

    def test_known_answer_with_quoted_inputs(self) -> None:
        assert digest('"s3cr3t"', '"alice"', TS) == KNOWN_DIGEST
        assert digest('s3"cr3t', 'al"ice', TS) == KNOWN_DIGEST

    def test_is_deterministic(self) -> None:
        assert digest("s", "u", TS) == digest("s", "u", TS)

    def test_is_64_lowercase_hex_chars(self) -> None:
        value = digest("s", "u", TS)
        assert len(value) == 64
        assert value == value.lower()
        int(value, 16)

    @pytest.mark.parametrize(
        "args",
        [
            ("S", "u", TS),
            ("s", "U", TS),
            ("s", "u", "2024-01-01T00:00:00.001Z"),
        ],
    )
    def test_changing_any_input_changes_output(self, args: tuple[str, str, str]) -> None:
        assert digest(*args) != digest("s", "u", TS)

    def test_double_quotes_are_stripped(self) -> None:
        assert digest('"s"', '"u"', TS) == digest("s", "u", TS)

    def test_sha256_hex_is_lowercase_hex(self) -> None:
        assert sha256_hex("abc") == hashlib.sha256(b"abc").hexdigest()

    def test_unicode_hashed_as_utf8(self) -> None:
        assert sha256_hex("müller") == hashlib.sha256("müller".encode("utf-8")).hexdigest()
        assert digest("s", "müller", TS) != digest("s", "muller", TS)


class TestFormatTimestamp:
    def test_epoch_of_year(self) -> None:
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024-01-01T00:00:00.000Z"

    def test_milliseconds_are_truncated_not_rounded(self) -> None:
        moment = datetime(2024, 5, 6, 7, 8, 9, 123999, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024-05-06T07:08:09.123Z"

    def test_naive_datetime_treated_as_utc(self) -> None:
        moment = datetime(2024, 5, 6, 7, 8, 9, 5000)
        assert format_timestamp(moment) == "2024-05-06T07:08:09.005Z"

    def test_aware_datetime_converted_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        moment = datetime(2024, 5, 6, 9, 0, 0, tzinfo=plus_two)
        assert format_timestamp(moment) == "2024-05-06T07:00:00.000Z"
