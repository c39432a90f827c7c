import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from discount_tool.engine import CalculatorMode, PricingInput
from discount_tool.services.validation import validate_input


def make_input(**overrides) -> PricingInput:
    return PricingInput.defaults().replace(**overrides)


def test_defaults_are_valid():
    for mode in CalculatorMode:
        result = validate_input(make_input(target_price=50), mode)
        assert result.valid, f"{mode}: {result.errors}"


@pytest.mark.parametrize("quantity", [0, -1])
def test_quantity_below_one_is_an_error(quantity):
    result = validate_input(make_input(quantity=quantity), CalculatorMode.PRICE)

    assert not result.valid
    assert "Quantity must be at least 1" in result.errors


def test_negative_amounts_are_errors():
    result = validate_input(
        make_input(original_price=-1, tax_rate=-2, shipping_cost=-3),
        CalculatorMode.PRICE,
    )

    assert not result.valid
    assert len(result.errors) == 3


def test_negative_original_price_ignored_in_original_mode():
    result = validate_input(make_input(original_price=-1, target_price=10), CalculatorMode.ORIGINAL)
    assert result.valid


def test_negative_target_price_is_an_error_in_reverse_modes():
    for mode in (CalculatorMode.DISCOUNT, CalculatorMode.ORIGINAL):
        result = validate_input(make_input(target_price=-5), mode)
        assert "Final price cannot be negative" in result.errors


def test_paid_more_than_original_warns():
    result = validate_input(make_input(original_price=10, target_price=15), CalculatorMode.DISCOUNT)

    assert result.valid
    assert any("higher than the original" in w for w in result.warnings)


def test_irreversible_discount_warns():
    result = validate_input(make_input(discount_value=100, target_price=20), CalculatorMode.ORIGINAL)

    assert result.valid
    assert any("cannot be reversed" in w for w in result.warnings)


def test_fixed_discount_above_price_warns():
    result = validate_input(
        make_input(original_price=10, discount_value=25, discount_type="fixed"),
        CalculatorMode.PRICE,
    )
    assert any("floored at zero" in w for w in result.warnings)


def test_over_100_percent_warns():
    result = validate_input(make_input(discount_value=120, additional_coupon=150), CalculatorMode.PRICE)

    assert result.valid
    assert "Discount is more than 100%" in result.warnings
    assert "Extra coupon is more than 100%" in result.warnings


def test_bundle_deal_with_discount_warns():
    result = validate_input(make_input(deal_type="bogo", quantity=2), CalculatorMode.PRICE)
    assert any("ignored for BOGO" in w for w in result.warnings)
