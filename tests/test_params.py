"""Tests for input enums, period scaling and SpendInputs."""

import pytest
from bilt_rewards import CardVariant, SpendInputs, TimePeriod, period_multiplier


class TestPeriodMultiplier:
    @pytest.mark.parametrize(
        "period, expected",
        [(TimePeriod.MONTHLY, 1), (TimePeriod.YEARLY, 12)],
    )
    def test_multiplier(self, period, expected):
        assert period_multiplier(period) == expected


class TestSpendInputs:
    def test_defaults_zero(self):
        assert SpendInputs().total == 0

    def test_total(self):
        assert SpendInputs(500, 300, 200, 100).total == 1100

    def test_scaled(self):
        scaled = SpendInputs(500, 300, 200, 100).scaled(12)
        assert scaled == SpendInputs(6000, 3600, 2400, 1200)

    def test_scaled_returns_copy(self):
        spend = SpendInputs(dining=10)
        spend.scaled(12)
        assert spend.dining == 10


class TestCardVariant:
    def test_from_value(self):
        assert CardVariant("obsidian") is CardVariant.OBSIDIAN

    def test_display_name(self):
        assert CardVariant.PALLADIUM.display_name == "Bilt Palladium"
