"""
Pricing Engine - core deal computation with traceability.

compute() is a pure function of its arguments:
- PRICE:    original price + discount (+ coupon or bundle deal) -> final price
- DISCOUNT: original price + amount paid -> effective discount rate
- ORIGINAL: final price + discount -> original price
Each mode resolves a unit original price and a unit final price; the common
tail then adds tax, shipping and quantity totals.

Degenerate numeric input is never rejected here. Zero quantity, negative
prices and oversized discounts produce whatever floating-point arithmetic
yields (inf/nan included), with a warning attached to the result.
"""
from dataclasses import dataclass, field
from typing import Union

from .deals import apply_fixed, apply_percent, divide, paid_units
from .models import (
    CalculatorMode,
    DealType,
    DiscountType,
    PricingInput,
    PricingResult,
    TraceStep,
)


@dataclass
class _UnitPrices:
    """Per-unit figures resolved by one of the mode branches."""
    original: float
    final: float
    subtotal: float
    total_saving: float
    effective_rate: float
    trace: list[TraceStep] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        self.trace.append(TraceStep(step=step, description=description, value=value))


def _rate(saving_per_unit: float, original_unit: float) -> float:
    """Saving as a percentage of the original unit price, 0 when there is no price."""
    if original_unit > 0:
        return divide(saving_per_unit, original_unit) * 100
    return 0.0


def _price_mode(p: PricingInput) -> _UnitPrices:
    """Forward calculation: original -> final."""
    original = p.original_price
    qty = p.quantity

    if p.deal_type == DealType.STANDARD:
        if p.discount_type == DiscountType.PERCENT:
            base_price, discount_amount, msg = apply_percent(original, p.discount_value)
        else:
            base_price, discount_amount, msg = apply_fixed(original, p.discount_value)
        trace = [TraceStep("Discount", msg, f"${base_price:.2f}")]

        # Coupon stacks on the already discounted price
        if p.additional_coupon > 0:
            base_price, extra, msg = apply_percent(base_price, p.additional_coupon)
            discount_amount += extra
            trace.append(TraceStep("Coupon", msg, f"${base_price:.2f}"))

        final = base_price
        subtotal = base_price * qty
        saving_per_unit = discount_amount
    else:
        units = paid_units(p.deal_type, qty)
        subtotal = units * original
        final = divide(subtotal, qty)
        saving_per_unit = original - final
        trace = [
            TraceStep(
                "Bundle Deal",
                f"{p.deal_type.value.upper()}: paying for {units} of {qty} units",
                f"${final:.2f}/unit",
            )
        ]

    prices = _UnitPrices(
        original=original,
        final=final,
        subtotal=subtotal,
        total_saving=original * qty - subtotal,
        effective_rate=_rate(saving_per_unit, original),
        trace=trace,
    )
    return prices


def _discount_mode(p: PricingInput) -> _UnitPrices:
    """Reverse calculation: original + amount paid -> rate."""
    original = p.original_price
    final = p.target_price

    # Paying more than the original is reported as no saving, never a negative one
    saving_per_unit = max(0.0, original - final)

    prices = _UnitPrices(
        original=original,
        final=final,
        subtotal=final * p.quantity,
        total_saving=saving_per_unit * p.quantity,
        effective_rate=_rate(saving_per_unit, original),
    )
    prices.add_trace("Saving", f"${original:.2f} original vs ${final:.2f} paid", f"${saving_per_unit:.2f}")
    return prices


def _original_mode(p: PricingInput) -> _UnitPrices:
    """Reverse calculation: final + discount -> original."""
    final = p.target_price
    warnings = []

    if p.discount_type == DiscountType.PERCENT:
        rate = p.discount_value / 100
        if rate < 1:
            original = divide(final, 1 - rate)
        else:
            # A 100%+ discount cannot be inverted
            original = final
            warnings.append(
                f"A {p.discount_value}% discount cannot be reversed; "
                "original price shown equals the final price"
            )
    else:
        original = final + p.discount_value

    prices = _UnitPrices(
        original=original,
        final=final,
        subtotal=final * p.quantity,
        total_saving=original * p.quantity - final * p.quantity,
        effective_rate=_rate(original - final, original),
        warnings=warnings,
    )
    prices.add_trace("Original Price", f"Derived from ${final:.2f} final price", f"${original:.2f}")
    return prices


_MODE_HANDLERS = {
    CalculatorMode.PRICE: _price_mode,
    CalculatorMode.DISCOUNT: _discount_mode,
    CalculatorMode.ORIGINAL: _original_mode,
}


def compute(pricing_input: PricingInput, mode: Union[CalculatorMode, str]) -> PricingResult:
    """
    Calculate a pricing outcome for one set of inputs.

    Args:
        pricing_input: PricingInput with prices, discount and totals context
        mode: CalculatorMode (or its string value) selecting what to solve for

    Returns:
        PricingResult with unit and total figures, trace, and warnings
    """
    mode = CalculatorMode(mode)
    prices = _MODE_HANDLERS[mode](pricing_input)

    qty = pricing_input.quantity
    tax_amount = prices.subtotal * (pricing_input.tax_rate / 100)
    total_cost = prices.subtotal + tax_amount + pricing_input.shipping_cost

    prices.add_trace("Subtotal", f"Quantity {qty} × ${prices.final:.2f}", f"${prices.subtotal:.2f}")
    prices.add_trace("Tax", f"{pricing_input.tax_rate}% of subtotal", f"${tax_amount:.2f}")
    prices.add_trace("Total", "Subtotal + tax + shipping", f"${total_cost:.2f}")

    warnings = list(prices.warnings)
    if qty == 0:
        warnings.append("Quantity is zero; per-unit figures are not finite")

    return PricingResult(
        final_price=prices.final,
        total_cost=total_cost,
        total_saving=prices.total_saving,
        tax_amount=tax_amount,
        price_per_unit=divide(total_cost, qty),
        effective_discount_rate=prices.effective_rate,
        calculation_mode=mode,
        trace=prices.trace,
        warnings=warnings,
    )
