"""
Tests for input validation utilities and date/time helpers.
"""

import pytest
from datetime import date, datetime
from utils.validators import (
    validate_email,
    validate_phone,
    validate_date_range,
    validate_date_format,
    validate_time_format,
    validate_rejection_comment,
    sanitize_input
)


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        """Test valid email formats."""
        assert validate_email('user@example.com') is True
        assert validate_email('superadmin@123.com') is True
        assert validate_email('user+tag@example.co.uk') is True

    def test_invalid_email(self):
        """Test invalid email formats."""
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('invalid') is False
        assert validate_email('missing@domain') is False
        assert validate_email('spaces in@email.com') is False


class TestValidatePhone:
    """Tests for Philippine phone validation."""

    def test_valid_mobile_numbers(self):
        assert validate_phone('09171234567') is True
        assert validate_phone('+639171234567') is True
        assert validate_phone('639171234567') is True
        assert validate_phone('0917 123 4567') is True
        assert validate_phone('0917-123-4567') is True

    def test_valid_landline(self):
        assert validate_phone('(02) 8123 4567') is True

    def test_invalid_phones(self):
        assert validate_phone('') is False
        assert validate_phone(None) is False
        assert validate_phone('12345') is False
        assert validate_phone('+34612345678') is False


class TestDateAndTimeFormats:

    def test_date_format(self):
        assert validate_date_format('2030-06-01') is True
        assert validate_date_format('2030-02-30') is False
        assert validate_date_format('06/01/2030') is False
        assert validate_date_format('') is False

    def test_time_format(self):
        assert validate_time_format('00:00') is True
        assert validate_time_format('9:30') is True
        assert validate_time_format('23:59') is True
        assert validate_time_format('24:00') is False
        assert validate_time_format('10:60') is False
        assert validate_time_format('10am') is False
        assert validate_time_format(None) is False

    def test_date_range(self):
        assert validate_date_range('2030-06-01', '2030-06-30') is True
        assert validate_date_range('2030-06-01', '2030-06-01') is True
        assert validate_date_range('2030-06-30', '2030-06-01') is False
        assert validate_date_range(None, '2030-06-01') is False


class TestRejectionComment:
    """A rejection needs at least three non-blank characters."""

    @pytest.mark.parametrize('comment,expected', [
        (None, False),
        ('', False),
        ('ok', False),
        ('   ok   ', False),
        ('okay', True),
        ('  no  ', False),
        ('  yes  ', True),
    ])
    def test_minimum_length_after_trim(self, comment, expected):
        assert validate_rejection_comment(comment) is expected


class TestSanitizeInput:

    def test_strips_and_truncates(self):
        assert sanitize_input('  hello  ') == 'hello'
        assert sanitize_input('abcdef', max_length=3) == 'abc'
        assert sanitize_input(None) == ''


class TestDatetimeHelpers:

    def test_to_day_key_accepts_dates_and_strings(self):
        from utils.datetime_helpers import to_day_key

        assert to_day_key(date(2030, 6, 1)) == '2030-06-01'
        assert to_day_key(datetime(2030, 6, 1, 23, 30)) == '2030-06-01'
        assert to_day_key('2030-06-01') == '2030-06-01'
        assert to_day_key('2030-06-01T16:00:00.000Z') == '2030-06-01'

    def test_to_day_key_rejects_garbage(self):
        from utils.datetime_helpers import to_day_key

        with pytest.raises(ValueError):
            to_day_key('June first')
        with pytest.raises(ValueError):
            to_day_key(20300601)

    def test_parse_hhmm(self):
        from utils.datetime_helpers import parse_hhmm

        assert parse_hhmm('18:00') == (18, 0)
        assert parse_hhmm('7:05') == (7, 5)
        with pytest.raises(ValueError):
            parse_hhmm('18h00')

    def test_format_log_date(self):
        from utils.datetime_helpers import format_log_date

        assert format_log_date('2025-06-01') == 'Jun 1, 2025'
        assert format_log_date('2025-12-25') == 'Dec 25, 2025'
