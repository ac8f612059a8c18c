"""Aggregate calculation: housing + card spend + Bilt Cash for one set of inputs."""

import dataclasses
import math
from dataclasses import dataclass, field

from bilt_rewards.params import (
    SPEND_CATEGORIES,
    BonusCategory,
    CardVariant,
    SpendInputs,
    TimePeriod,
    period_multiplier,
)
from bilt_rewards.results import (
    BiltCashFlow,
    CalculatorResult,
    FeeBreakdown,
    PointsBreakdown,
)
from bilt_rewards.spend import calc_bilt_cash_from_spend, calc_card_spend_points
from bilt_rewards.strategies import HousingInput, MaxPoints, NoFeeUnlock, calc_housing

HOUSING_SLOTS = ("rent", "mortgage")


class InvalidInputError(ValueError):
    """Raised by the input surface when entered values cannot be used as-is."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


@dataclass
class CalculatorInputs:
    """Everything one calculation needs.

    Amounts are entered as monthly figures; ``grocery_ytd`` is the
    calendar-year-to-date grocery spend and is never rescaled.
    """

    period: TimePeriod = TimePeriod.MONTHLY
    card: CardVariant = CardVariant.BLUE
    spend: SpendInputs = field(default_factory=SpendInputs)
    rent: HousingInput | None = None
    mortgage: HousingInput | None = None

    # Obsidian-only
    bonus_category: BonusCategory | None = None
    grocery_ytd: float | None = None


def _scale_housing(housing: HousingInput | None, multiplier: int) -> HousingInput | None:
    if housing is None:
        return None
    return housing.scaled(multiplier)


def calc_totals(inputs: CalculatorInputs) -> CalculatorResult:
    """Run every calculator for ``inputs`` and merge the results.

    Yearly mode multiplies housing amounts, Bilt Cash allocations and spend
    by 12 before applying the monthly rules.
    """
    multiplier = period_multiplier(inputs.period)
    rent_input = _scale_housing(inputs.rent, multiplier)
    mortgage_input = _scale_housing(inputs.mortgage, multiplier)
    spend = inputs.spend.scaled(multiplier)

    rent = calc_housing(rent_input, inputs.period)
    mortgage = calc_housing(mortgage_input, inputs.period)
    card_spend = calc_card_spend_points(
        spend,
        inputs.card,
        inputs.bonus_category,
        inputs.grocery_ytd,  # already annual
        inputs.period,
    )

    return CalculatorResult(
        points=PointsBreakdown(
            rent=rent.points,
            mortgage=mortgage.points,
            card_spend=card_spend,
        ),
        bilt_cash=BiltCashFlow(
            earned_from_spend=calc_bilt_cash_from_spend(spend),
            redeemed_for_unlocking=(
                rent.bilt_cash_redeemed_for_unlock + mortgage.bilt_cash_redeemed_for_unlock
            ),
            applied_to_fees=rent.bilt_cash_applied_to_fee + mortgage.bilt_cash_applied_to_fee,
        ),
        fees=FeeBreakdown(
            rent_out_of_pocket=rent.fee_out_of_pocket,
            mortgage_out_of_pocket=mortgage.fee_out_of_pocket,
        ),
        rent=rent,
        mortgage=mortgage,
    )


def compare_cards(inputs: CalculatorInputs) -> dict[CardVariant, CalculatorResult]:
    """Run the same inputs through every card variant."""
    return {
        card: calc_totals(dataclasses.replace(inputs, card=card))
        for card in CardVariant
    }


def _problem(label: str, value: float) -> str | None:
    if not math.isfinite(value):
        return f"{label} {value!r} is not a finite number"
    if value < 0:
        return f"{label} ${value:,.2f} is negative"
    return None


def validate_inputs(inputs: CalculatorInputs) -> list[str]:
    """Return list of problems with entered values (empty when usable as-is)."""
    checks = [(f"{c} spend", getattr(inputs.spend, c)) for c in SPEND_CATEGORIES]

    for slot in HOUSING_SLOTS:
        housing = getattr(inputs, slot)
        if housing is None:
            continue
        checks.append((f"{slot} amount", housing.amount))
        strategy = housing.strategy
        if isinstance(strategy, MaxPoints):
            checks.append((f"{slot} Bilt Cash allocated to fee", strategy.bilt_cash_allocated_to_fee))
        elif isinstance(strategy, NoFeeUnlock):
            checks.append((f"{slot} Bilt Cash redeemed for unlock", strategy.bilt_cash_redeemed_for_unlock))

    if inputs.grocery_ytd is not None:
        checks.append(("grocery YTD", inputs.grocery_ytd))

    errors = []
    for label, value in checks:
        problem = _problem(label, value)
        if problem:
            errors.append(problem)
    return errors


def _clamp(value: float) -> float:
    # NaN / ±inf → 0, not clamped to a bound
    if not math.isfinite(value):
        return 0.0
    return max(0.0, value)


def _clamp_housing(housing: HousingInput | None) -> HousingInput | None:
    if housing is None:
        return None
    strategy = housing.strategy
    if isinstance(strategy, MaxPoints):
        strategy = dataclasses.replace(
            strategy,
            bilt_cash_allocated_to_fee=_clamp(strategy.bilt_cash_allocated_to_fee),
        )
    elif isinstance(strategy, NoFeeUnlock):
        strategy = dataclasses.replace(
            strategy,
            bilt_cash_redeemed_for_unlock=_clamp(strategy.bilt_cash_redeemed_for_unlock),
        )
    return HousingInput(amount=_clamp(housing.amount), strategy=strategy)


def clamp_inputs(inputs: CalculatorInputs) -> CalculatorInputs:
    """Copy of ``inputs`` with every negative or non-finite amount set to zero."""
    spend = SpendInputs(
        **{c: _clamp(getattr(inputs.spend, c)) for c in SPEND_CATEGORIES}
    )
    grocery_ytd = inputs.grocery_ytd
    if grocery_ytd is not None:
        grocery_ytd = _clamp(grocery_ytd)
    return dataclasses.replace(
        inputs,
        spend=spend,
        rent=_clamp_housing(inputs.rent),
        mortgage=_clamp_housing(inputs.mortgage),
        grocery_ytd=grocery_ytd,
    )
