"""Calculation result records.

Points are always non-negative integers. Fees and Bilt Cash are raw floats;
rounding for display is left to the caller.
"""

import dataclasses
from dataclasses import dataclass, field


@dataclass
class HousingResult:
    """Outcome of one rent or mortgage payment under one strategy."""

    points: int = 0
    fee_out_of_pocket: float = 0.0
    bilt_cash_applied_to_fee: float = 0.0
    bilt_cash_redeemed_for_unlock: float = 0.0
    # Only defined when the denominator is positive
    cost_per_point: float | None = None
    implied_percent_of_payment: float | None = None


@dataclass
class CardSpendResult:
    """Floored points per spend category; ``total`` is their exact sum."""

    dining: int = 0
    grocery: int = 0
    travel: int = 0
    other: int = 0
    total: int = field(init=False)

    def __post_init__(self):
        self.total = self.dining + self.grocery + self.travel + self.other


@dataclass
class PointsBreakdown:
    rent: int
    mortgage: int
    card_spend: CardSpendResult
    total: int = field(init=False)

    def __post_init__(self):
        self.total = self.rent + self.mortgage + self.card_spend.total


@dataclass
class BiltCashFlow:
    """Bilt Cash earned and consumed; ``net_change`` may be negative."""

    earned_from_spend: float
    redeemed_for_unlocking: float
    applied_to_fees: float
    net_change: float = field(init=False)

    def __post_init__(self):
        self.net_change = (
            self.earned_from_spend - self.redeemed_for_unlocking - self.applied_to_fees
        )


@dataclass
class FeeBreakdown:
    rent_out_of_pocket: float
    mortgage_out_of_pocket: float
    total_out_of_pocket: float = field(init=False)

    def __post_init__(self):
        self.total_out_of_pocket = self.rent_out_of_pocket + self.mortgage_out_of_pocket


@dataclass
class CalculatorResult:
    points: PointsBreakdown
    bilt_cash: BiltCashFlow
    fees: FeeBreakdown
    # Per-slot detail for derived metrics (cost per point etc.)
    rent: HousingResult = field(default_factory=HousingResult)
    mortgage: HousingResult = field(default_factory=HousingResult)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)
