# tests/test_tokens.py
"""
Test tokenizer and cursor.

Verifies whitespace handling and that the cursor only moves on a match.
"""

import pytest

from metarwx.decoder.fields import decode_station, decode_wind
from metarwx.decoder.tokens import Cursor, token_at, tokenize


class TestTokenize:
    """Tests for splitting report text."""

    def test_splits_on_whitespace_runs(self):
        """Tabs, newlines and repeated spaces all separate tokens."""
        assert tokenize("METAR  KSFO\t010953Z\n28010KT") == (
            "METAR", "KSFO", "010953Z", "28010KT",
        )

    def test_trims_leading_and_trailing(self):
        assert tokenize("   METAR KSFO   ") == ("METAR", "KSFO")

    @pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
    def test_blank_input_is_none(self, raw):
        """Blank input has no tokens at all."""
        assert tokenize(raw) is None

    def test_returns_immutable_tuple(self):
        assert isinstance(tokenize("METAR KSFO"), tuple)


class TestTokenAt:
    def test_in_range(self):
        assert token_at(("A", "B"), 1) == "B"

    def test_past_end_is_none(self):
        assert token_at(("A", "B"), 2) is None


class TestCursor:
    """Tests for the read cursor."""

    def test_advances_on_match(self):
        """A matching decoder moves the cursor past what it consumed."""
        cursor = Cursor(("KSFO", "28010KT"))
        assert cursor.apply(decode_station) == "KSFO"
        assert cursor.position == 1

    def test_stays_put_on_mismatch(self):
        """A declining decoder leaves the position unchanged."""
        cursor = Cursor(("10SM", "FEW020"))
        assert cursor.apply(decode_wind) is None
        assert cursor.position == 0
        assert cursor.peek() == "10SM"

    def test_two_token_consumption(self):
        """Wind with a variable-direction group moves two tokens."""
        cursor = Cursor(("27008KT", "240V300", "10SM"))
        wind = cursor.apply(decode_wind)
        assert wind.variable_from == 240
        assert cursor.position == 2
        assert cursor.remaining() == ("10SM",)

    def test_exhausted(self):
        cursor = Cursor(("KSFO",))
        assert not cursor.exhausted
        cursor.apply(decode_station)
        assert cursor.exhausted
        assert cursor.peek() is None
        assert cursor.apply(decode_station) is None

    def test_backwards_move_rejected(self):
        """A decoder returning an earlier position is a programming error."""
        cursor = Cursor(("A", "B"))
        cursor.position = 1

        def rewind(tokens, position):
            return "x", 0

        with pytest.raises(ValueError):
            cursor.apply(rewind)
