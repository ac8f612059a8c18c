"""Tests for the share-state codec."""

import base64
import json

import pytest
from bilt_rewards import (
    BonusCategory,
    CalculatorInputs,
    CardVariant,
    HousingInput,
    MaxPoints,
    NoFeeUnlock,
    SpendInputs,
    TimePeriod,
    decode_state,
    default_inputs,
    encode_state,
    load_state_or_default,
    share_url,
)
from bilt_rewards.state import inputs_from_dict, inputs_to_dict, state_from_url


def _encode_json(data) -> str:
    return base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")


FULL = CalculatorInputs(
    period=TimePeriod.YEARLY,
    card=CardVariant.OBSIDIAN,
    spend=SpendInputs(dining=500, grocery=300, travel=200, other=100),
    rent=HousingInput(2000, MaxPoints(False, 25.5)),
    mortgage=HousingInput(3000, NoFeeUnlock(45)),
    bonus_category=BonusCategory.GROCERY,
    grocery_ytd=12000,
)


class TestInputsToDict:
    def test_wire_names(self):
        data = inputs_to_dict(FULL)
        assert data["mode"] == "yearly"
        assert data["card"] == "obsidian"
        assert data["obsidianBonusCategory"] == "grocery"
        assert data["groceryYTD"] == 12000
        assert data["rent"] == {
            "amount": 2000,
            "option": "max_points",
            "applyBiltCashToFee": False,
            "biltCashBalanceAllocatedToFee": 25.5,
        }
        assert data["mortgage"] == {
            "amount": 3000,
            "option": "no_fee_unlock",
            "biltCashRedeemForUnlock": 45,
        }

    def test_absent_fields_omitted(self):
        data = inputs_to_dict(CalculatorInputs())
        assert "rent" not in data
        assert "mortgage" not in data
        assert "groceryYTD" not in data


class TestEncodeDecode:
    def test_round_trip(self):
        assert decode_state(encode_state(FULL)) == FULL

    def test_encoded_is_url_safe(self):
        encoded = encode_state(FULL)
        assert "+" not in encoded
        assert "/" not in encoded

    def test_accepts_standard_base64(self):
        state = _encode_json({"card": "palladium", "spend": {"dining": 100}})
        decoded = decode_state(state)
        assert decoded.card == CardVariant.PALLADIUM

    def test_partial_state_merged_over_defaults(self):
        decoded = decode_state(_encode_json({"card": "palladium", "spend": {"dining": 100}}))
        assert decoded.period == TimePeriod.MONTHLY
        assert decoded.spend == SpendInputs(dining=100)
        assert decoded.rent is None
        assert decoded.bonus_category == BonusCategory.DINING

    def test_housing_defaults_apply_bilt_cash(self):
        decoded = decode_state(_encode_json({"rent": {"amount": 1800, "option": "max_points"}}))
        assert decoded.rent == HousingInput(1800, MaxPoints(True, 0))


class TestInvalidState:
    def test_garbage(self):
        assert decode_state("not-a-state") is None

    def test_not_an_object(self):
        assert decode_state(_encode_json([1, 2, 3])) is None

    def test_unknown_card(self):
        assert decode_state(_encode_json({"card": "gold"})) is None

    def test_unknown_housing_option(self):
        assert decode_state(_encode_json({"rent": {"amount": 1, "option": "cashback"}})) is None

    def test_housing_without_amount(self):
        assert decode_state(_encode_json({"rent": {"option": "max_points"}})) is None

    def test_non_numeric_spend(self):
        assert decode_state(_encode_json({"spend": {"dining": "lots"}})) is None

    @pytest.mark.parametrize(
        "data",
        [
            {"spend": {"dining": float("nan")}},
            {"rent": {"amount": float("inf"), "option": "max_points"}},
            {"mortgage": {"amount": 1000, "option": "no_fee_unlock", "biltCashRedeemForUnlock": float("-inf")}},
            {"obsidianBonusCategory": "grocery", "groceryYTD": float("nan")},
        ],
    )
    def test_non_finite_numbers(self, data):
        assert decode_state(_encode_json(data)) is None

    def test_non_boolean_apply_cash(self):
        state = _encode_json({"rent": {"amount": 1000, "applyBiltCashToFee": "false"}})
        assert decode_state(state) is None

    def test_logs_warning(self, caplog):
        decode_state("not-a-state")
        assert "Ignoring invalid share state" in caplog.text


class TestLoadStateOrDefault:
    def test_missing(self):
        assert load_state_or_default(None) == default_inputs()
        assert load_state_or_default("") == default_inputs()

    def test_invalid_falls_back(self):
        assert load_state_or_default("not-a-state") == default_inputs()

    def test_nan_falls_back(self):
        state = _encode_json({"spend": {"dining": float("nan")}})
        assert load_state_or_default(state) == default_inputs()

    def test_valid(self):
        assert load_state_or_default(encode_state(FULL)) == FULL

    def test_defaults_are_fresh_copies(self):
        a = load_state_or_default(None)
        a.spend.dining = 999
        assert load_state_or_default(None).spend.dining == 0


class TestShareUrl:
    def test_sets_state_param(self):
        url = share_url(FULL, "https://example.com/calc?theme=dark")
        assert url.startswith("https://example.com/calc?")
        assert "theme=dark" in url
        assert state_from_url(url) == FULL

    def test_replaces_existing_state(self):
        url = share_url(FULL, "https://example.com/?state=old")
        assert url.count("state=") == 1
        assert state_from_url(url) == FULL

    def test_url_without_state(self):
        assert state_from_url("https://example.com/") is None


class TestInputsFromDict:
    def test_explicit_defaults(self):
        defaults = CalculatorInputs(card=CardVariant.PALLADIUM)
        assert inputs_from_dict({}, defaults).card == CardVariant.PALLADIUM
