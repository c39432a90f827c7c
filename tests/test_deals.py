import math
import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from discount_tool.engine.deals import apply_fixed, apply_percent, divide, paid_units
from discount_tool.engine.models import DealType


@pytest.mark.parametrize("quantity,paid", [(0, 0), (1, 1), (2, 1), (3, 2), (10, 5), (11, 6)])
def test_paid_units_bogo(quantity, paid):
    assert paid_units(DealType.BOGO, quantity) == paid


@pytest.mark.parametrize("quantity,paid", [(0, 0), (1, 1), (2, 2), (3, 2), (5, 4), (6, 4), (9, 6)])
def test_paid_units_b2g1(quantity, paid):
    assert paid_units(DealType.B2G1, quantity) == paid


def test_paid_units_standard_pays_everything():
    assert paid_units("standard", 7) == 7


def test_apply_percent():
    price, discount, msg = apply_percent(80.0, 10)

    assert price == pytest.approx(72)
    assert discount == pytest.approx(8)
    assert "10% off" in msg


def test_apply_fixed_reports_nominal_discount_when_floored():
    price, discount, msg = apply_fixed(10.0, 25.0)

    assert price == 0
    assert discount == 25.0
    assert "$25.00 off" in msg


def test_apply_fixed_keeps_nan():
    price, _, _ = apply_fixed(math.nan, 5)
    assert math.isnan(price)


def test_divide_regular():
    assert divide(9, 3) == 3


@pytest.mark.parametrize("numerator,expected", [(5, math.inf), (-5, -math.inf)])
def test_divide_by_zero_is_infinite(numerator, expected):
    assert divide(numerator, 0) == expected


def test_divide_by_negative_zero_flips_sign():
    assert divide(5, -0.0) == -math.inf


@pytest.mark.parametrize("numerator", [0, 0.0, math.nan])
def test_divide_zero_by_zero_is_nan(numerator):
    assert math.isnan(divide(numerator, 0))
