"""Bilt Card Rewards Calculator Package."""

from bilt_rewards.params import (
    BonusCategory,
    CardVariant,
    SpendInputs,
    TimePeriod,
    YEARLY_MULTIPLIER,
    period_multiplier,
)
from bilt_rewards.results import (
    BiltCashFlow,
    CalculatorResult,
    CardSpendResult,
    FeeBreakdown,
    HousingResult,
    PointsBreakdown,
)
from bilt_rewards.strategies import (
    HousingInput,
    HousingStrategy,
    MaxPoints,
    NoFeeUnlock,
    calc_housing,
)
from bilt_rewards.spend import (
    GROCERY_BONUS_ANNUAL_CAP,
    calc_bilt_cash_from_spend,
    calc_card_spend_points,
    tiered_points,
)
from bilt_rewards.calculator import (
    CalculatorInputs,
    InvalidInputError,
    calc_totals,
    clamp_inputs,
    compare_cards,
    validate_inputs,
)
from bilt_rewards.state import (
    decode_state,
    default_inputs,
    encode_state,
    load_state_or_default,
    share_url,
)

__all__ = [
    "BonusCategory",
    "CardVariant",
    "SpendInputs",
    "TimePeriod",
    "YEARLY_MULTIPLIER",
    "period_multiplier",
    "BiltCashFlow",
    "CalculatorResult",
    "CardSpendResult",
    "FeeBreakdown",
    "HousingResult",
    "PointsBreakdown",
    "HousingInput",
    "HousingStrategy",
    "MaxPoints",
    "NoFeeUnlock",
    "calc_housing",
    "GROCERY_BONUS_ANNUAL_CAP",
    "calc_bilt_cash_from_spend",
    "calc_card_spend_points",
    "tiered_points",
    "CalculatorInputs",
    "InvalidInputError",
    "calc_totals",
    "clamp_inputs",
    "compare_cards",
    "validate_inputs",
    "decode_state",
    "default_inputs",
    "encode_state",
    "load_state_or_default",
    "share_url",
]
