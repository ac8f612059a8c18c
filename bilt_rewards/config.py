"""TOML config loader with CLI > config > default resolution."""

import argparse
import logging
import math
import sys
import tomllib
from pathlib import Path
from typing import Callable

from bilt_rewards.calculator import (
    CalculatorInputs,
    InvalidInputError,
    clamp_inputs,
    validate_inputs,
)
from bilt_rewards.params import BonusCategory, CardVariant, SpendInputs, TimePeriod
from bilt_rewards.state import load_state_or_default
from bilt_rewards.strategies import HousingInput, MaxPoints, NoFeeUnlock

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "period": "monthly",
    "card": "blue",
    "dining": 0.0,
    "grocery": 0.0,
    "travel": 0.0,
    "other": 0.0,
    "bonus_category": "dining",
    "grocery_ytd": None,
    # None = no rent / mortgage entered
    "rent": None,
    "rent_option": "max_points",
    "rent_apply_cash": True,
    "rent_cash_to_fee": 0.0,
    "rent_cash_redeem": 0.0,
    "mortgage": None,
    "mortgage_option": "max_points",
    "mortgage_apply_cash": True,
    "mortgage_cash_to_fee": 0.0,
    "mortgage_cash_redeem": 0.0,
}

# TOML table keys → flat DEFAULTS keys
_HOUSING_TABLE_KEYS = {
    "amount": "",
    "option": "_option",
    "apply_cash_to_fee": "_apply_cash",
    "cash_allocated_to_fee": "_cash_to_fee",
    "cash_redeemed_for_unlock": "_cash_redeem",
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    logger.debug("Loaded config from %s", path)
    # Normalize [spend] table → flat category keys
    if "spend" in raw:
        spend = raw.pop("spend")
        if isinstance(spend, dict):
            for category, value in spend.items():
                raw.setdefault(category, value)
    # Normalize [rent] / [mortgage] tables → rent, rent_option, ...
    for slot in ("rent", "mortgage"):
        table = raw.get(slot)
        if not isinstance(table, dict):
            continue
        raw.pop(slot)
        for key, suffix in _HOUSING_TABLE_KEYS.items():
            if key in table:
                raw[f"{slot}{suffix}"] = table[key]
        if "amount" not in table:
            logger.warning("[%s] table has no amount; treating %s as not entered", slot, slot)
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared calculator flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="Config file path (default: config.toml)")
    parser.add_argument("--period", choices=[p.value for p in TimePeriod], default=None, help=f"Display period (default: {d['period']})")
    parser.add_argument("--card", choices=[c.value for c in CardVariant], default=None, help=f"Card variant (default: {d['card']})")
    parser.add_argument("--dining", type=float, default=None, help="Monthly dining spend, USD")
    parser.add_argument("--grocery", type=float, default=None, help="Monthly grocery spend, USD")
    parser.add_argument("--travel", type=float, default=None, help="Monthly travel spend, USD")
    parser.add_argument("--other", type=float, default=None, help="Monthly other spend, USD")
    parser.add_argument("--bonus-category", choices=[b.value for b in BonusCategory], default=None, help=f"Obsidian 3X category (default: {d['bonus_category']})")
    parser.add_argument("--grocery-ytd", type=float, default=None, help="Obsidian grocery spend so far this calendar year, USD (monthly mode)")
    for slot in ("rent", "mortgage"):
        parser.add_argument(f"--{slot}", type=float, default=None, help=f"Monthly {slot} payment, USD (omit if none)")
        parser.add_argument(f"--{slot}-option", choices=["max_points", "no_fee_unlock"], default=None, help=f"{slot.capitalize()} strategy (default: max_points)")
        parser.add_argument(f"--{slot}-no-cash-to-fee", action="store_false", dest=f"{slot}_apply_cash", default=None, help="Do not apply Bilt Cash to the 3%% fee")
        parser.add_argument(f"--{slot}-cash-to-fee", type=float, default=None, help="Monthly Bilt Cash allocated to the fee, USD")
        parser.add_argument(f"--{slot}-cash-redeem", type=float, default=None, help="Monthly Bilt Cash redeemed to unlock points, USD")
    parser.add_argument("--state", type=str, default=None, help="Load inputs from a share state (overrides config and flags)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def _to_float(r: dict, key: str, problems: list[str]) -> float:
    value = r[key]
    if isinstance(value, bool):
        problems.append(f"{key} must be a number, got {value!r}")
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        problems.append(f"{key} must be a number, got {value!r}")
        return 0.0
    if not math.isfinite(number):
        problems.append(f"{key} must be a finite number, got {value!r}")
        return 0.0
    return number


def _to_bool(r: dict, key: str, problems: list[str]) -> bool:
    value = r[key]
    if not isinstance(value, bool):
        problems.append(f"{key} must be true or false, got {value!r}")
        return DEFAULTS[key]
    return value


def _build_housing(r: dict, slot: str, problems: list[str]) -> HousingInput | None:
    if r[slot] is None:
        return None
    amount = _to_float(r, slot, problems)
    option = r[f"{slot}_option"]
    if option == NoFeeUnlock.OPTION:
        strategy = NoFeeUnlock(
            bilt_cash_redeemed_for_unlock=_to_float(r, f"{slot}_cash_redeem", problems),
        )
    elif option == MaxPoints.OPTION:
        strategy = MaxPoints(
            apply_bilt_cash_to_fee=_to_bool(r, f"{slot}_apply_cash", problems),
            bilt_cash_allocated_to_fee=_to_float(r, f"{slot}_cash_to_fee", problems),
        )
    else:
        problems.append(f"{slot}_option must be max_points or no_fee_unlock, got {option!r}")
        return None
    return HousingInput(amount=amount, strategy=strategy)


def _to_enum(enum_cls, r: dict, key: str, problems: list[str]):
    try:
        return enum_cls(r[key])
    except ValueError:
        choices = ", ".join(e.value for e in enum_cls)
        problems.append(f"{key} must be one of {choices}, got {r[key]!r}")
        return enum_cls(DEFAULTS[key])


def build_inputs(r: dict) -> CalculatorInputs:
    """Build CalculatorInputs from resolved config dict.

    Raises InvalidInputError if any value is non-numeric or not a known choice.
    """
    problems: list[str] = []
    spend = SpendInputs(
        dining=_to_float(r, "dining", problems),
        grocery=_to_float(r, "grocery", problems),
        travel=_to_float(r, "travel", problems),
        other=_to_float(r, "other", problems),
    )
    card = _to_enum(CardVariant, r, "card", problems)
    inputs = CalculatorInputs(
        period=_to_enum(TimePeriod, r, "period", problems),
        card=card,
        spend=spend,
        rent=_build_housing(r, "rent", problems),
        mortgage=_build_housing(r, "mortgage", problems),
    )
    if card == CardVariant.OBSIDIAN:
        inputs.bonus_category = _to_enum(BonusCategory, r, "bonus_category", problems)
        if r["grocery_ytd"] is not None and inputs.bonus_category == BonusCategory.GROCERY:
            inputs.grocery_ytd = _to_float(r, "grocery_ytd", problems)
    if problems:
        raise InvalidInputError(problems)
    return inputs


def sanitize_inputs(inputs: CalculatorInputs) -> CalculatorInputs:
    """Report negative or non-finite amounts on stderr and replace them with zero."""
    problems = validate_inputs(inputs)
    if not problems:
        return inputs
    for problem in problems:
        print(f"  warning: {problem}; using $0.00", file=sys.stderr)
    return clamp_inputs(inputs)


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[CalculatorInputs, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (inputs, namespace). ``inputs`` is clamped and ready for calc_totals.
    namespace: raw argparse.Namespace (for extra CLI args added via add_args_fn).
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.state:
        inputs = load_state_or_default(args.state)
    else:
        config = load_config(args.config)
        r = resolve(args, config)
        try:
            inputs = build_inputs(r)
        except InvalidInputError as e:
            for problem in e.problems:
                print(f"  error: {problem}", file=sys.stderr)
            raise SystemExit(2)
    return sanitize_inputs(inputs), args
