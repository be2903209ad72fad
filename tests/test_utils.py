"""Tests for utility functions."""

from datetime import datetime, timedelta, timezone

from mboxscan.utils.header_utils import decode_header_value, parse_date, split_sender, truncate_subject


class TestDecodeHeaderValue:
    """Test email header decoding."""

    def test_decode_plain_text(self):
        """Test decoding plain text without encoding."""
        result = decode_header_value("Plain Text")
        assert result == "Plain Text"

    def test_decode_utf8_encoded(self):
        """Test decoding UTF-8 encoded header."""
        result = decode_header_value("=?utf-8?B?5Lit5paH?=")  # "中文" in base64
        assert result == "中文"

    def test_decode_iso8859_encoded(self):
        """Test decoding ISO-8859-1 encoded header."""
        result = decode_header_value("=?iso-8859-1?Q?H=E9llo?=")
        assert result == "Héllo"

    def test_decode_unknown_charset(self):
        """Test an unknown charset falls back to UTF-8 with replacement."""
        result = decode_header_value("=?x-unknown?Q?abc?=")
        assert result == "abc"

    def test_decode_empty_string(self):
        """Test decoding empty string."""
        result = decode_header_value("")
        assert result == ""

    def test_decode_none_value(self):
        """Test decoding None returns empty string."""
        result = decode_header_value(None)
        assert result == ""


class TestSplitSender:
    """Test splitting From headers."""

    def test_name_and_address(self):
        """Test a display name with an address."""
        assert split_sender("John Doe <john@example.com>") == ("John Doe", "john@example.com")

    def test_bare_address(self):
        """Test an address without display name."""
        assert split_sender("john@example.com") == ("", "john@example.com")

    def test_encoded_display_name(self):
        """Test an encoded display name is decoded."""
        name, address = split_sender("=?utf-8?B?5Lit5paH?= <zh@example.com>")
        assert name == "中文"
        assert address == "zh@example.com"

    def test_empty_value(self):
        """Test a missing header yields empty parts."""
        assert split_sender(None) == ("", "")


class TestParseDate:
    """Test Date header parsing."""

    def test_parse_rfc2822_date(self):
        """Test a regular Date header."""
        result = parse_date("Thu, 01 Jan 2015 00:00:01 +0100")
        assert result == datetime(2015, 1, 1, 0, 0, 1, tzinfo=timezone(timedelta(hours=1)))

    def test_parse_invalid_date(self):
        """Test an unparseable date returns None."""
        assert parse_date("not a date") is None

    def test_parse_missing_date(self):
        """Test a missing date returns None."""
        assert parse_date(None) is None


class TestTruncateSubject:
    """Test subject line truncation."""

    def test_truncate_short_subject(self):
        """Test truncation of short subject (no change)."""
        result = truncate_subject("Short subject", max_length=50)
        assert result == "Short subject"
        assert not result.endswith("...")

    def test_truncate_long_subject(self):
        """Test truncation of long subject."""
        long_subject = "This is a very long subject line that exceeds fifty characters"
        result = truncate_subject(long_subject, max_length=50)

        assert len(result) <= 50
        assert result.endswith("...")
        assert "This is a very long subject" in result

    def test_truncate_exact_length(self):
        """Test truncation at exact max length."""
        subject = "a" * 50
        result = truncate_subject(subject, max_length=50)

        # Should not truncate if exactly at limit
        assert result == subject

    def test_truncate_one_over_limit(self):
        """Test truncation when one character over limit."""
        subject = "a" * 51
        result = truncate_subject(subject, max_length=50)

        assert len(result) == 50
        assert result.endswith("...")

    def test_truncate_collapses_whitespace(self):
        """Test folded subjects are collapsed onto one line."""
        result = truncate_subject("Folded\n  subject\tline")
        assert result == "Folded subject line"

    def test_truncate_empty_string(self):
        """Test truncation of empty string."""
        result = truncate_subject("")
        assert result == ""

    def test_truncate_none_value(self):
        """Test truncation of None returns empty string."""
        result = truncate_subject(None)
        assert result == ""
