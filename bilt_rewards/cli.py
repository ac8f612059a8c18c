"""CLI entry point for a single rewards calculation (or all-card comparison)."""

import argparse
import json

from bilt_rewards.calculator import CalculatorInputs, calc_totals, compare_cards
from bilt_rewards.config import parse_args
from bilt_rewards.params import BonusCategory, CardVariant, TimePeriod
from bilt_rewards.results import CalculatorResult, HousingResult
from bilt_rewards.state import inputs_to_dict, share_url
from bilt_rewards.strategies import HousingInput, MaxPoints, NoFeeUnlock


def format_currency(value: float) -> str:
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def format_points(value: int) -> str:
    return f"{value:,}"


def _add_args(parser: argparse.ArgumentParser):
    parser.add_argument("--compare", action="store_true", help="Compare all three cards side by side")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--share-url", type=str, default=None, metavar="BASE_URL", help="Print a shareable link for these inputs")


def _describe_housing(label: str, housing: HousingInput | None) -> str:
    if housing is None:
        return f"  {label}: not entered"
    strategy = housing.strategy
    text = f"  {label}: {format_currency(housing.amount)}/month"
    if isinstance(strategy, MaxPoints):
        text += " (Max Points, 3% fee"
        if strategy.apply_bilt_cash_to_fee and strategy.bilt_cash_allocated_to_fee > 0:
            text += f", {format_currency(strategy.bilt_cash_allocated_to_fee)}/month Bilt Cash to fee"
        text += ")"
    elif isinstance(strategy, NoFeeUnlock):
        text += (
            f" (No Fee + Unlock, {format_currency(strategy.bilt_cash_redeemed_for_unlock)}"
            "/month Bilt Cash redeemed)"
        )
    return text


def _print_header(inputs: CalculatorInputs, compare: bool = False):
    period = "Yearly (monthly amounts x 12)" if inputs.period == TimePeriod.YEARLY else "Monthly"
    print("=" * 60)
    print("Bilt Card Rewards Calculator")
    if not compare:
        card = inputs.card.display_name
        if inputs.card == CardVariant.OBSIDIAN:
            bonus = inputs.bonus_category or BonusCategory.DINING
            card += f" (3X {bonus.value})"
        print(f"  Card: {card}")
    print(f"  Period: {period}")
    print(_describe_housing("Rent", inputs.rent))
    print(_describe_housing("Mortgage", inputs.mortgage))
    s = inputs.spend
    print(
        f"  Spend/month: dining {format_currency(s.dining)}, grocery {format_currency(s.grocery)}, "
        f"travel {format_currency(s.travel)}, other {format_currency(s.other)}"
    )
    if inputs.grocery_ytd is not None:
        print(f"  Grocery YTD: {format_currency(inputs.grocery_ytd)}")
    print("=" * 60)


def _print_row(label: str, value: str):
    print(f"{label:<32} {value:>20}")


def _print_housing_metrics(label: str, housing: HousingResult):
    if housing.cost_per_point is not None:
        cents = housing.cost_per_point * 100
        _print_row(f"  {label} cost per point", f"{cents:.2f}c")
    if housing.implied_percent_of_payment is not None:
        _print_row(f"  {label} implied % of payment", f"{housing.implied_percent_of_payment:.2%}")


def _print_result(result: CalculatorResult):
    points = result.points
    card = points.card_spend
    print("\n[Points]")
    print("-" * 60)
    _print_row("From rent", format_points(points.rent))
    _print_row("From mortgage", format_points(points.mortgage))
    _print_row("From card spend", format_points(card.total))
    _print_row("  dining", format_points(card.dining))
    _print_row("  grocery", format_points(card.grocery))
    _print_row("  travel", format_points(card.travel))
    _print_row("  other", format_points(card.other))
    print("-" * 60)
    _print_row("Total points", format_points(points.total))

    cash = result.bilt_cash
    print("\n[Bilt Cash]")
    print("-" * 60)
    _print_row("Earned from spend", format_currency(cash.earned_from_spend))
    _print_row("Used for unlocking", format_currency(-cash.redeemed_for_unlocking))
    _print_row("Used for fees", format_currency(-cash.applied_to_fees))
    print("-" * 60)
    _print_row("Net change", format_currency(cash.net_change))

    fees = result.fees
    print("\n[Fees out of pocket]")
    print("-" * 60)
    _print_row("Rent", format_currency(fees.rent_out_of_pocket))
    _print_row("Mortgage", format_currency(fees.mortgage_out_of_pocket))
    print("-" * 60)
    _print_row("Total", format_currency(fees.total_out_of_pocket))

    _print_housing_metrics("Rent", result.rent)
    _print_housing_metrics("Mortgage", result.mortgage)


def _print_comparison(results: dict[CardVariant, CalculatorResult]):
    cards = list(results)
    header = f"{'':<24}" + "".join(f"{c.display_name:>16}" for c in cards)
    print("\n[Compare all cards]")
    print("-" * len(header))
    print(header)
    print("-" * len(header))
    rows = [
        ("Total points", lambda r: format_points(r.points.total)),
        ("Bilt Cash earned", lambda r: format_currency(r.bilt_cash.earned_from_spend)),
        ("Fees out of pocket", lambda r: format_currency(r.fees.total_out_of_pocket)),
        ("Points from rent", lambda r: format_points(r.points.rent)),
        ("Points from mortgage", lambda r: format_points(r.points.mortgage)),
        ("Points from spend", lambda r: format_points(r.points.card_spend.total)),
    ]
    for label, fmt in rows:
        print(f"{label:<24}" + "".join(f"{fmt(results[c]):>16}" for c in cards))
    print("-" * len(header))


def main():
    """Execute a rewards calculation for the configured inputs"""
    inputs, args = parse_args("Bilt card rewards calculator", _add_args)

    if args.share_url:
        print(share_url(inputs, args.share_url))
        return

    if args.compare:
        results = compare_cards(inputs)
        if args.json:
            print(json.dumps({c.value: r.to_dict() for c, r in results.items()}, indent=2))
            return
        _print_header(inputs, compare=True)
        _print_comparison(results)
        return

    result = calc_totals(inputs)
    if args.json:
        print(json.dumps({"inputs": inputs_to_dict(inputs), "result": result.to_dict()}, indent=2))
        return
    _print_header(inputs)
    _print_result(result)


if __name__ == "__main__":
    main()
