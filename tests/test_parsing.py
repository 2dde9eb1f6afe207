"""Tests for wavetools.utils.parsing module."""

import pytest

from wavetools.utils.parsing import is_digits, lenient_int


class TestLenientInt:
    """Tests for lenient_int function."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("42", 42),
            ("  7", 7),
            ("+3", 3),
            ("-12", -12),
            ("12abc", 12),
            ("abc", 0),
            ("", 0),
            ("0x1f", 0),
        ],
    )
    def test_signed(self, text, expected):
        """Leading digits win; anything else is 0."""
        assert lenient_int(text) == expected

    def test_unsigned_ignores_minus(self):
        """Without sign support, "-5" has no leading digits."""
        assert lenient_int("-5", signed=False) == 0
        assert lenient_int("+5", signed=False) == 5
        assert lenient_int("5-", signed=False) == 5


class TestIsDigits:
    """Tests for is_digits function."""

    def test_plain_digits(self):
        assert is_digits("0123")

    @pytest.mark.parametrize("text", ["", " 1", "1 ", "+1", "1a", "²", "١"])
    def test_rejects_everything_else(self, text):
        """Only non-empty ASCII digit strings qualify."""
        assert not is_digits(text)
