"""Card spend points and Bilt Cash earned from spend."""

import math

from bilt_rewards.params import (
    YEARLY_MULTIPLIER,
    BonusCategory,
    CardVariant,
    SpendInputs,
    TimePeriod,
)
from bilt_rewards.results import CardSpendResult

# Base multipliers per category (dining, grocery, travel, other)
CATEGORY_MULTIPLIERS: dict[CardVariant, dict[str, int]] = {
    CardVariant.BLUE: {"dining": 1, "grocery": 1, "travel": 1, "other": 1},
    CardVariant.OBSIDIAN: {"dining": 1, "grocery": 1, "travel": 2, "other": 1},
    CardVariant.PALLADIUM: {"dining": 2, "grocery": 2, "travel": 2, "other": 2},
}

OBSIDIAN_BONUS_MULTIPLIER = 3
DEFAULT_BONUS_CATEGORY = BonusCategory.DINING
# Grocery spend eligible for Obsidian 3X per calendar year (USD)
GROCERY_BONUS_ANNUAL_CAP = 25000.0

BILT_CASH_RATE = 0.04


def tiered_points(
    amount: float,
    eligible_cap: float,
    bonus_multiplier: int = OBSIDIAN_BONUS_MULTIPLIER,
    base_multiplier: int = 1,
) -> int:
    """Points for spend split at ``eligible_cap``: bonus rate below, base rate above.

    Each tier is floored separately before summing.
    """
    eligible = min(amount, eligible_cap)
    remainder = max(0.0, amount - eligible_cap)
    return math.floor(bonus_multiplier * eligible) + math.floor(base_multiplier * remainder)


def _grocery_cap_remaining(
    grocery: float, grocery_ytd: float | None, period: TimePeriod
) -> float:
    """Grocery spend still eligible for 3X in this period.

    Monthly mode without a YTD figure assumes the annual cap is spread evenly
    over 12 months. This is an approximation; uneven months are not reconciled.
    """
    if period == TimePeriod.YEARLY:
        return GROCERY_BONUS_ANNUAL_CAP
    if grocery_ytd is not None:
        return max(0.0, GROCERY_BONUS_ANNUAL_CAP - grocery_ytd)
    if grocery * YEARLY_MULTIPLIER <= GROCERY_BONUS_ANNUAL_CAP:
        # Whole month fits the annualized cap
        return grocery
    return GROCERY_BONUS_ANNUAL_CAP / YEARLY_MULTIPLIER


def calc_card_spend_points(
    spend: SpendInputs,
    card: CardVariant,
    bonus_category: BonusCategory | None = None,
    grocery_ytd: float | None = None,
    period: TimePeriod = TimePeriod.MONTHLY,
) -> CardSpendResult:
    """Points from categorized card spend for one card variant.

    ``bonus_category`` and ``grocery_ytd`` are only consulted for Obsidian.
    Spend must already be scaled for ``period``.
    """
    multipliers = CATEGORY_MULTIPLIERS[card]
    points = {
        category: math.floor(multiplier * getattr(spend, category))
        for category, multiplier in multipliers.items()
    }

    if card == CardVariant.OBSIDIAN:
        bonus = bonus_category or DEFAULT_BONUS_CATEGORY
        if bonus == BonusCategory.DINING:
            points["dining"] = math.floor(OBSIDIAN_BONUS_MULTIPLIER * spend.dining)
        else:
            cap = _grocery_cap_remaining(spend.grocery, grocery_ytd, period)
            points["grocery"] = tiered_points(spend.grocery, cap)

    return CardSpendResult(**points)


def calc_bilt_cash_from_spend(spend: SpendInputs) -> float:
    """Bilt Cash earned on card spend (4%). Housing payments earn none."""
    return BILT_CASH_RATE * spend.total
