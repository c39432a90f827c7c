"""
Input Validation - caller-side checks before a calculation is displayed.

The engine accepts any numbers; this is where the UI and API decide what
to block and what to flag.
"""
from dataclasses import dataclass, field
from typing import Union

from ..engine.models import CalculatorMode, DealType, DiscountType, PricingInput


@dataclass
class ValidationResult:
    """Result of input validation."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: str):
        self.errors.append(error)
        self.valid = False


def validate_input(pricing_input: PricingInput, mode: Union[CalculatorMode, str]) -> ValidationResult:
    """Validate pricing inputs for the given mode."""
    mode = CalculatorMode(mode)
    p = pricing_input
    result = ValidationResult(valid=True)

    # Required ranges
    if p.quantity < 1:
        result.add_error("Quantity must be at least 1")

    if mode in (CalculatorMode.PRICE, CalculatorMode.DISCOUNT) and p.original_price < 0:
        result.add_error("Original price cannot be negative")

    if mode in (CalculatorMode.DISCOUNT, CalculatorMode.ORIGINAL) and p.target_price < 0:
        result.add_error("Final price cannot be negative")

    if p.tax_rate < 0:
        result.add_error("Tax rate cannot be negative")

    if p.shipping_cost < 0:
        result.add_error("Shipping cost cannot be negative")

    # Suspicious but computable
    if mode == CalculatorMode.DISCOUNT:
        if p.target_price > p.original_price:
            result.warnings.append("Price paid is higher than the original price; saving is reported as zero")
        return result

    if p.discount_type == DiscountType.PERCENT and p.discount_value > 100:
        result.warnings.append("Discount is more than 100%")

    if mode == CalculatorMode.ORIGINAL:
        if p.discount_type == DiscountType.PERCENT and p.discount_value >= 100:
            result.warnings.append("A discount of 100% or more cannot be reversed")
        return result

    if p.deal_type != DealType.STANDARD:
        if p.discount_value or p.additional_coupon:
            result.warnings.append(
                f"Discount and coupon are ignored for {p.deal_type.value.upper()} deals"
            )
        return result

    if p.discount_type == DiscountType.FIXED and p.discount_value > p.original_price:
        result.warnings.append("Fixed discount exceeds the original price; final price is floored at zero")

    if p.additional_coupon > 100:
        result.warnings.append("Extra coupon is more than 100%")

    return result
