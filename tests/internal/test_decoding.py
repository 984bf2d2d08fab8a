"""Tests for the shared JSON decoder."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import BaseModel, ValidationError

from apirequest_sdk._internal.decoding import (
    DEFAULT_DECODER,
    JSONDecoder,
    Timestamp,
    parse_timestamp,
)


class Transaction(BaseModel):
    status: str
    expires_at: Timestamp | None = None


class TestParseTimestamp:
    """Tests for parse_timestamp function."""

    def test_parses_utc_designator(self):
        """Should parse a trailing Z as UTC."""
        parsed = parse_timestamp("2019-03-06T22:44:52.000Z")
        assert parsed == datetime(2019, 3, 6, 22, 44, 52, tzinfo=UTC)

    def test_parses_numeric_offset(self):
        """Should parse +HHMM offsets."""
        parsed = parse_timestamp("2019-03-06T22:44:52.250-0800")
        assert parsed.utcoffset() == timedelta(hours=-8)
        assert parsed.microsecond == 250_000

    def test_passes_through_non_strings(self):
        """Should leave non-string values for pydantic."""
        value = datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert parse_timestamp(value) is value
        assert parse_timestamp(None) is None

    def test_rejects_other_formats(self):
        """Should reject timestamps without milliseconds and offset."""
        with pytest.raises(ValueError):
            parse_timestamp("2019-03-06 22:44:52")

    @pytest.mark.parametrize(
        ("value", "microsecond"),
        [
            ("2019-03-06T22:44:52.1Z", 100_000),
            ("2019-03-06T22:44:52.123Z", 123_000),
            ("2019-03-06T22:44:52.123456Z", 123_456),
        ],
    )
    def test_fraction_widths_accepted(self, value, microsecond):
        """Should accept one to six fraction digits."""
        assert parse_timestamp(value).microsecond == microsecond

    @pytest.mark.parametrize(
        "value",
        [
            "2019-03-06T22:44:52Z",
            "2019-03-06T22:44:52.1234567Z",
        ],
    )
    def test_fraction_width_limits(self, value):
        """Should reject a missing or over-long fraction."""
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestJSONDecoder:
    """Tests for JSONDecoder."""

    def test_decodes_model(self):
        """Should decode JSON bytes into the model."""
        decoded = JSONDecoder().decode(
            Transaction, b'{"status":"SUCCESS","expires_at":"2019-03-06T22:44:52.000Z"}'
        )
        assert decoded.status == "SUCCESS"
        assert decoded.expires_at == datetime(2019, 3, 6, 22, 44, 52, tzinfo=UTC)

    def test_accepts_str(self):
        """Should decode JSON text as well as bytes."""
        assert JSONDecoder().decode(Transaction, '{"status":"MFA_REQUIRED"}').status == "MFA_REQUIRED"

    def test_invalid_json_raises(self):
        """Should raise ValidationError for malformed JSON."""
        with pytest.raises(ValidationError):
            DEFAULT_DECODER.decode(Transaction, b"{not json")

    def test_shape_mismatch_raises(self):
        """Should raise ValidationError when required fields are missing."""
        with pytest.raises(ValidationError):
            DEFAULT_DECODER.decode(Transaction, b'{"state":"x"}')

    def test_bad_timestamp_raises(self):
        """Should raise ValidationError for timestamps in another format."""
        with pytest.raises(ValidationError):
            DEFAULT_DECODER.decode(Transaction, b'{"status":"x","expires_at":"2019-03-06"}')
