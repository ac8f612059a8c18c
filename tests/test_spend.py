"""Tests for card spend points and Bilt Cash from spend."""

import pytest
from bilt_rewards import (
    BonusCategory,
    CardVariant,
    SpendInputs,
    TimePeriod,
    calc_bilt_cash_from_spend,
    calc_card_spend_points,
    tiered_points,
)

TYPICAL = SpendInputs(dining=500, grocery=300, travel=200, other=100)


class TestTieredPoints:
    @pytest.mark.parametrize(
        "amount, cap, expected",
        [
            (0, 25000, 0),
            (1000, 25000, 3000),
            (25000, 25000, 75000),
            (26000, 25000, 76000),
            (3000, 1000, 5000),
            (500, 0, 500),
        ],
    )
    def test_split(self, amount, cap, expected):
        assert tiered_points(amount, cap) == expected

    def test_each_tier_floored_separately(self):
        """3 × 0.5 = 1.5 → 1, 1 × 0.5 = 0.5 → 0"""
        assert tiered_points(1.0, 0.5) == 1


class TestBlue:
    def test_typical(self):
        result = calc_card_spend_points(TYPICAL, CardVariant.BLUE)
        assert result.total == 1100
        assert (result.dining, result.grocery, result.travel, result.other) == (500, 300, 200, 100)

    def test_floors_each_category(self):
        """10.5 + 10.5 = 21 but each category floors to 10 first."""
        result = calc_card_spend_points(SpendInputs(10.5, 10.5, 0, 0), CardVariant.BLUE)
        assert result.total == 20

    def test_bonus_category_ignored(self):
        result = calc_card_spend_points(TYPICAL, CardVariant.BLUE, BonusCategory.GROCERY, 24000)
        assert result.total == 1100

    def test_zero_spend(self):
        assert calc_card_spend_points(SpendInputs(), CardVariant.BLUE).total == 0


class TestPalladium:
    def test_typical(self):
        result = calc_card_spend_points(TYPICAL, CardVariant.PALLADIUM)
        assert result.total == 2200
        assert result.dining == 1000

    def test_doubles_before_flooring(self):
        result = calc_card_spend_points(SpendInputs(0.6, 0, 0, 0), CardVariant.PALLADIUM)
        assert result.dining == 1

    def test_bonus_category_ignored(self):
        result = calc_card_spend_points(TYPICAL, CardVariant.PALLADIUM, BonusCategory.DINING)
        assert result.total == 2200


class TestObsidianDining:
    def test_typical(self):
        result = calc_card_spend_points(TYPICAL, CardVariant.OBSIDIAN, BonusCategory.DINING)
        assert result.dining == 1500
        assert result.grocery == 300
        assert result.travel == 400
        assert result.other == 100
        assert result.total == 2300

    def test_defaults_to_dining(self):
        result = calc_card_spend_points(TYPICAL, CardVariant.OBSIDIAN)
        assert result.total == 2300

    def test_dining_bonus_uncapped(self):
        result = calc_card_spend_points(
            SpendInputs(dining=30000), CardVariant.OBSIDIAN, BonusCategory.DINING,
            period=TimePeriod.YEARLY,
        )
        assert result.dining == 90000

    def test_grocery_ytd_ignored(self):
        result = calc_card_spend_points(TYPICAL, CardVariant.OBSIDIAN, BonusCategory.DINING, 30000)
        assert result.grocery == 300


class TestObsidianGroceryYearly:
    def test_above_cap(self):
        """26,000: 25,000 at 3X + 1,000 at 1X"""
        result = calc_card_spend_points(
            SpendInputs(grocery=26000), CardVariant.OBSIDIAN, BonusCategory.GROCERY,
            period=TimePeriod.YEARLY,
        )
        assert result.grocery == 76000

    def test_below_cap(self):
        result = calc_card_spend_points(
            SpendInputs(grocery=3600), CardVariant.OBSIDIAN, BonusCategory.GROCERY,
            period=TimePeriod.YEARLY,
        )
        assert result.grocery == 10800

    def test_ytd_ignored(self):
        result = calc_card_spend_points(
            SpendInputs(grocery=26000), CardVariant.OBSIDIAN, BonusCategory.GROCERY, 24000,
            TimePeriod.YEARLY,
        )
        assert result.grocery == 76000

    def test_dining_base_rate(self):
        result = calc_card_spend_points(
            SpendInputs(dining=6000, travel=2400), CardVariant.OBSIDIAN, BonusCategory.GROCERY,
            period=TimePeriod.YEARLY,
        )
        assert result.dining == 6000
        assert result.travel == 4800


class TestObsidianGroceryMonthlyWithYTD:
    def test_partially_within_cap(self):
        """YTD 24,000 → 1,000 left at 3X, remaining 2,000 at 1X"""
        result = calc_card_spend_points(
            SpendInputs(grocery=3000), CardVariant.OBSIDIAN, BonusCategory.GROCERY, 24000,
        )
        assert result.grocery == 5000

    def test_cap_exhausted(self):
        result = calc_card_spend_points(
            SpendInputs(grocery=1000), CardVariant.OBSIDIAN, BonusCategory.GROCERY, 30000,
        )
        assert result.grocery == 1000

    def test_fully_within_cap(self):
        result = calc_card_spend_points(
            SpendInputs(grocery=3000), CardVariant.OBSIDIAN, BonusCategory.GROCERY, 0,
        )
        assert result.grocery == 9000


class TestObsidianGroceryMonthlyApproximation:
    def test_annualized_within_cap(self):
        """2,000/month × 12 = 24,000 ≤ 25,000 → all 3X"""
        result = calc_card_spend_points(
            SpendInputs(grocery=2000), CardVariant.OBSIDIAN, BonusCategory.GROCERY,
        )
        assert result.grocery == 6000

    def test_annualized_above_cap(self):
        """3,000/month → 2,083.33 at 3X (6,250) + 916.67 at 1X (916)"""
        result = calc_card_spend_points(
            SpendInputs(grocery=3000), CardVariant.OBSIDIAN, BonusCategory.GROCERY,
        )
        assert result.grocery == 6250 + 916

    def test_typical(self):
        result = calc_card_spend_points(TYPICAL, CardVariant.OBSIDIAN, BonusCategory.GROCERY)
        assert result.dining == 500
        assert result.grocery == 900
        assert result.travel == 400
        assert result.other == 100
        assert result.total == 1900


class TestCardSpendTotal:
    @pytest.mark.parametrize("card", list(CardVariant))
    @pytest.mark.parametrize("bonus", list(BonusCategory))
    def test_total_is_sum_of_categories(self, card, bonus):
        spend = SpendInputs(dining=123.45, grocery=2500.5, travel=77.7, other=0.99)
        result = calc_card_spend_points(spend, card, bonus)
        assert result.total == result.dining + result.grocery + result.travel + result.other
        assert all(isinstance(v, int) for v in (result.dining, result.grocery, result.travel, result.other))


class TestBiltCashFromSpend:
    def test_typical(self):
        """4% of 1,100"""
        assert calc_bilt_cash_from_spend(TYPICAL) == pytest.approx(44)

    def test_zero(self):
        assert calc_bilt_cash_from_spend(SpendInputs()) == 0

    def test_not_floored(self):
        assert calc_bilt_cash_from_spend(SpendInputs(other=10)) == pytest.approx(0.4)
