"""Share-state codec: CalculatorInputs <-> compact URL-safe text."""

import base64
import binascii
import dataclasses
import json
import logging
import math
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from bilt_rewards.calculator import CalculatorInputs
from bilt_rewards.params import (
    SPEND_CATEGORIES,
    BonusCategory,
    CardVariant,
    SpendInputs,
    TimePeriod,
)
from bilt_rewards.strategies import (
    STRATEGY_BY_OPTION,
    HousingInput,
    MaxPoints,
    NoFeeUnlock,
)

logger = logging.getLogger(__name__)

STATE_PARAM = "state"


def _number(value) -> float:
    """float(value), rejecting bools and the NaN / Infinity literals json accepts."""
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


def default_inputs() -> CalculatorInputs:
    """Fresh copy of the inputs used when no state is supplied."""
    return CalculatorInputs(
        period=TimePeriod.MONTHLY,
        card=CardVariant.BLUE,
        spend=SpendInputs(),
        bonus_category=BonusCategory.DINING,
    )


def _housing_to_dict(housing: HousingInput) -> dict:
    data = {"amount": housing.amount, "option": housing.strategy.OPTION}
    strategy = housing.strategy
    if isinstance(strategy, MaxPoints):
        data["applyBiltCashToFee"] = strategy.apply_bilt_cash_to_fee
        data["biltCashBalanceAllocatedToFee"] = strategy.bilt_cash_allocated_to_fee
    elif isinstance(strategy, NoFeeUnlock):
        data["biltCashRedeemForUnlock"] = strategy.bilt_cash_redeemed_for_unlock
    return data


def _housing_from_dict(data: dict) -> HousingInput:
    if not isinstance(data, dict):
        raise TypeError("housing election must be an object")
    option = data.get("option", MaxPoints.OPTION)
    if option not in STRATEGY_BY_OPTION:
        raise ValueError(f"unknown housing option: {option!r}")
    if option == NoFeeUnlock.OPTION:
        strategy = NoFeeUnlock(
            bilt_cash_redeemed_for_unlock=_number(data.get("biltCashRedeemForUnlock", 0)),
        )
    else:
        apply_cash = data.get("applyBiltCashToFee", True)
        if not isinstance(apply_cash, bool):
            raise TypeError(f"applyBiltCashToFee must be a boolean, got {apply_cash!r}")
        strategy = MaxPoints(
            apply_bilt_cash_to_fee=apply_cash,
            bilt_cash_allocated_to_fee=_number(data.get("biltCashBalanceAllocatedToFee", 0)),
        )
    return HousingInput(amount=_number(data["amount"]), strategy=strategy)


def inputs_to_dict(inputs: CalculatorInputs) -> dict:
    """Plain-JSON form of ``inputs``; absent optional fields are omitted."""
    data: dict = {
        "mode": inputs.period.value,
        "card": inputs.card.value,
        "spend": dataclasses.asdict(inputs.spend),
    }
    if inputs.rent is not None:
        data["rent"] = _housing_to_dict(inputs.rent)
    if inputs.mortgage is not None:
        data["mortgage"] = _housing_to_dict(inputs.mortgage)
    if inputs.bonus_category is not None:
        data["obsidianBonusCategory"] = inputs.bonus_category.value
    if inputs.grocery_ytd is not None:
        data["groceryYTD"] = inputs.grocery_ytd
    return data


def inputs_from_dict(data: dict, defaults: CalculatorInputs | None = None) -> CalculatorInputs:
    """Merge a (possibly partial) plain-JSON state over ``defaults``.

    Raises ValueError / TypeError / KeyError on structurally invalid data.
    """
    if not isinstance(data, dict):
        raise TypeError(f"state must be an object, got {type(data).__name__}")
    if defaults is None:
        defaults = default_inputs()

    spend_data = data.get("spend") or {}
    if not isinstance(spend_data, dict):
        raise TypeError("spend must be an object")
    spend = SpendInputs(**{
        c: _number(spend_data.get(c, getattr(defaults.spend, c))) for c in SPEND_CATEGORIES
    })

    bonus = data.get("obsidianBonusCategory")
    grocery_ytd = data.get("groceryYTD")
    return CalculatorInputs(
        period=TimePeriod(data["mode"]) if "mode" in data else defaults.period,
        card=CardVariant(data["card"]) if "card" in data else defaults.card,
        spend=spend,
        rent=_housing_from_dict(data["rent"]) if data.get("rent") else defaults.rent,
        mortgage=(
            _housing_from_dict(data["mortgage"]) if data.get("mortgage") else defaults.mortgage
        ),
        bonus_category=BonusCategory(bonus) if bonus is not None else defaults.bonus_category,
        grocery_ytd=_number(grocery_ytd) if grocery_ytd is not None else defaults.grocery_ytd,
    )


def encode_state(inputs: CalculatorInputs) -> str:
    """Encode ``inputs`` as URL-safe base64 JSON."""
    payload = json.dumps(inputs_to_dict(inputs), separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


def decode_state(text: str) -> CalculatorInputs | None:
    """Decode share-state text. Returns None when it is not a valid state."""
    try:
        raw = base64.urlsafe_b64decode(text.encode("ascii") + b"=" * (-len(text) % 4))
        data = json.loads(raw.decode("utf-8"))
        return inputs_from_dict(data)
    except (binascii.Error, UnicodeError, ValueError, TypeError, KeyError) as e:
        logger.warning("Ignoring invalid share state: %s", e)
        return None


def load_state_or_default(text: str | None) -> CalculatorInputs:
    """Decode ``text``, falling back to the default inputs when it is missing or invalid."""
    if not text:
        return default_inputs()
    decoded = decode_state(text)
    if decoded is None:
        return default_inputs()
    return decoded


def share_url(inputs: CalculatorInputs, base_url: str) -> str:
    """Return ``base_url`` with the encoded state set as its ``state`` query parameter."""
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query) if k != STATE_PARAM]
    query.append((STATE_PARAM, encode_state(inputs)))
    return urlunsplit(parts._replace(query=urlencode(query)))


def state_from_url(url: str) -> CalculatorInputs | None:
    """Extract and decode the ``state`` query parameter of ``url``."""
    for key, value in parse_qsl(urlsplit(url).query):
        if key == STATE_PARAM:
            return decode_state(value)
    return None
