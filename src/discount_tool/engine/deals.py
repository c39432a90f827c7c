"""
Deal arithmetic - discount application and promotional bundle units.

Used by the pricing engine to apply percentage/fixed discounts and to
resolve how many units are actually paid for under bundle offers.
"""
import math

from .models import DealType


def divide(numerator: float, denominator: float) -> float:
    """
    Floating-point division that never raises.

    A zero denominator yields ±inf, or nan for 0/0, the way IEEE-754
    hardware division does.
    """
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def paid_units(deal_type: DealType, quantity: int) -> int:
    """
    Number of units charged for under a bundle offer.

    standard: every unit is paid
    bogo:     one free for every one bought -> ceil(qty / 2)
    b2g1:     one free in every group of three -> 2 per group + remainder
    """
    deal_type = DealType(deal_type)
    if deal_type == DealType.BOGO:
        return math.ceil(quantity / 2)
    if deal_type == DealType.B2G1:
        groups, remainder = divmod(quantity, 3)
        return groups * 2 + remainder
    return quantity


def apply_percent(price: float, percent: float) -> tuple[float, float, str]:
    """
    Take a percentage off a price.

    Returns (new_price, discount_amount, trace_message).
    """
    discount = price * (percent / 100)
    new_price = price - discount
    return new_price, discount, f"{percent}% off ${price:.2f} → ${new_price:.2f}"


def apply_fixed(price: float, amount: float) -> tuple[float, float, str]:
    """
    Take a flat amount off a price, flooring the price at zero.

    The full nominal amount is reported as the discount even when the floor
    kicks in. Returns (new_price, discount_amount, trace_message).
    """
    new_price = price - amount
    if new_price < 0:
        new_price = 0.0
    return new_price, amount, f"${amount:.2f} off ${price:.2f} → ${new_price:.2f}"
