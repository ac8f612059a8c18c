"""Housing payment strategies (rent / mortgage)."""

import math
from dataclasses import dataclass, field
from typing import ClassVar

from bilt_rewards.params import TimePeriod
from bilt_rewards.results import HousingResult


@dataclass
class HousingStrategy:
    """Base class for housing payment strategies"""

    OPTION: ClassVar[str] = ""

    def evaluate(self, amount: float) -> HousingResult:
        raise NotImplementedError

    def scaled(self, multiplier: float) -> "HousingStrategy":
        raise NotImplementedError


@dataclass
class MaxPoints(HousingStrategy):
    """1 point per $1 of payment, paid for with a 3% transaction fee.

    Bilt Cash allocated to the fee offsets it, never below zero.
    """

    apply_bilt_cash_to_fee: bool = True
    bilt_cash_allocated_to_fee: float = 0.0

    OPTION: ClassVar[str] = "max_points"
    FEE_RATE: ClassVar[float] = 0.03

    def evaluate(self, amount: float) -> HousingResult:
        fee_due = self.FEE_RATE * amount
        applied = (
            min(self.bilt_cash_allocated_to_fee, fee_due)
            if self.apply_bilt_cash_to_fee
            else 0.0
        )
        fee_out_of_pocket = fee_due - applied
        points = math.floor(amount)
        return HousingResult(
            points=points,
            fee_out_of_pocket=fee_out_of_pocket,
            bilt_cash_applied_to_fee=applied,
            bilt_cash_redeemed_for_unlock=0.0,
            cost_per_point=fee_out_of_pocket / points if points > 0 else None,
        )

    def scaled(self, multiplier: float) -> "MaxPoints":
        return MaxPoints(
            apply_bilt_cash_to_fee=self.apply_bilt_cash_to_fee,
            bilt_cash_allocated_to_fee=self.bilt_cash_allocated_to_fee * multiplier,
        )


@dataclass
class NoFeeUnlock(HousingStrategy):
    """No transaction fee; points are unlocked by redeeming Bilt Cash.

    $3 of Bilt Cash unlocks 100 points, capped at 1 point per $1 of payment.
    """

    bilt_cash_redeemed_for_unlock: float = 0.0

    OPTION: ClassVar[str] = "no_fee_unlock"
    CASH_PER_UNLOCK: ClassVar[float] = 3.0
    POINTS_PER_UNLOCK: ClassVar[int] = 100

    def evaluate(self, amount: float) -> HousingResult:
        redeemed = self.bilt_cash_redeemed_for_unlock
        unlocked = math.floor(redeemed / self.CASH_PER_UNLOCK * self.POINTS_PER_UNLOCK)
        points = min(unlocked, math.floor(amount))
        return HousingResult(
            points=points,
            fee_out_of_pocket=0.0,
            bilt_cash_applied_to_fee=0.0,
            bilt_cash_redeemed_for_unlock=redeemed,
            cost_per_point=redeemed / points if points > 0 else None,
            implied_percent_of_payment=redeemed / amount if amount > 0 else None,
        )

    def scaled(self, multiplier: float) -> "NoFeeUnlock":
        return NoFeeUnlock(
            bilt_cash_redeemed_for_unlock=self.bilt_cash_redeemed_for_unlock * multiplier,
        )


STRATEGY_BY_OPTION: dict[str, type[HousingStrategy]] = {
    MaxPoints.OPTION: MaxPoints,
    NoFeeUnlock.OPTION: NoFeeUnlock,
}


@dataclass
class HousingInput:
    """A rent or mortgage payment election (monthly USD amount)."""

    amount: float
    strategy: HousingStrategy = field(default_factory=MaxPoints)

    def scaled(self, multiplier: float) -> "HousingInput":
        return HousingInput(
            amount=self.amount * multiplier,
            strategy=self.strategy.scaled(multiplier),
        )


def calc_housing(
    housing: HousingInput | None, period: TimePeriod = TimePeriod.MONTHLY
) -> HousingResult:
    """Points, fee and Bilt Cash flow for one housing payment.

    Amounts are taken as already scaled for ``period``; nothing is rescaled here.
    A missing election and a zero payment both give the all-zero result.
    """
    if housing is None or housing.amount <= 0:
        return HousingResult()
    return housing.strategy.evaluate(housing.amount)
