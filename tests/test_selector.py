# Copyright (c) Syntropy Systems
"""Tests for best-value selection."""

import pytest

from trialboard.errors import ValueParseFailure
from trialboard.models.experiment import ObjectiveType
from trialboard.selector import parse_value, prefers, select

MIN = ObjectiveType.MINIMIZE
MAX = ObjectiveType.MAXIMIZE


class TestSelect:
    """Tests for select()."""

    def test_minimize_picks_smaller(self) -> None:
        """Test that minimize keeps the smaller value."""
        assert select(MIN, "0.5", "0.3") == "0.3"
        assert select(MIN, "0.3", "0.5") == "0.3"

    def test_maximize_picks_larger(self) -> None:
        """Test that maximize keeps the larger value."""
        assert select(MAX, "0.5", "0.3") == "0.5"
        assert select(MAX, "0.3", "0.5") == "0.5"

    def test_compares_numerically(self) -> None:
        """Test that values are compared as numbers, not strings."""
        assert select(MIN, "10", "9") == "9"
        assert select(MAX, "1e-3", "0.01") == "0.01"
        assert select(MIN, "-1", "-2") == "-2"

    @pytest.mark.parametrize("direction", [MIN, MAX])
    def test_tie_keeps_current(self, direction: ObjectiveType) -> None:
        """Test that equal values keep the stored string."""
        assert select(direction, "0.50", "0.5") == "0.50"
        assert not prefers(direction, "1", "1.0")

    @pytest.mark.parametrize("direction", [MIN, MAX])
    def test_unparsable_candidate_loses(self, direction: ObjectiveType) -> None:
        """Test that an unparsable candidate never replaces a number."""
        assert select(direction, "0.5", "n/a") == "0.5"

    @pytest.mark.parametrize("direction", [MIN, MAX])
    def test_unparsable_current_loses(self, direction: ObjectiveType) -> None:
        """Test that a number replaces an unparsable stored value."""
        assert select(direction, "n/a", "0.5") == "0.5"

    @pytest.mark.parametrize("direction", [MIN, MAX])
    def test_both_unparsable_returns_candidate(self, direction: ObjectiveType) -> None:
        """Test that the most recent value wins when neither parses."""
        assert select(direction, "n/a", "") == ""
        assert prefers(direction, "abc", "def")

    def test_nan_is_unparsable(self) -> None:
        """Test that NaN never wins against a number."""
        assert select(MIN, "0.5", "nan") == "0.5"
        assert select(MAX, "NaN", "0.5") == "0.5"

    def test_infinity_is_a_number(self) -> None:
        """Test that infinities compare normally."""
        assert select(MAX, "0.5", "inf") == "inf"
        assert select(MIN, "0.5", "-inf") == "-inf"


class TestParseValue:
    """Tests for parse_value()."""

    def test_parses_decimal(self) -> None:
        """Test parsing plain and exponent notation."""
        assert parse_value("0.25") == 0.25
        assert parse_value("1e-05") == 1e-05

    def test_rejects_text(self) -> None:
        """Test that text raises ValueParseFailure."""
        with pytest.raises(ValueParseFailure):
            _ = parse_value("loss")

    def test_rejects_empty(self) -> None:
        """Test that the empty string raises ValueParseFailure."""
        with pytest.raises(ValueParseFailure):
            _ = parse_value("")
