"""
Data models for the pricing engine.

Uses dataclasses for structured, immutable data representation.
"""
import dataclasses
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class CalculatorMode(str, Enum):
    """Which quantity the calculator solves for."""
    PRICE = "PRICE"          # original + discount -> final
    DISCOUNT = "DISCOUNT"    # original + paid -> discount rate
    ORIGINAL = "ORIGINAL"    # final + discount -> original


class DiscountType(str, Enum):
    PERCENT = "percent"
    FIXED = "fixed"


class DealType(str, Enum):
    """Promotional bundle offers, only consulted in PRICE mode."""
    STANDARD = "standard"
    BOGO = "bogo"    # buy one, get one free
    B2G1 = "b2g1"    # buy two, get one free


@dataclass(frozen=True)
class TraceStep:
    """A single step in the computation trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class PricingInput:
    """Pricing parameters supplied by the caller for one calculation."""
    original_price: float
    discount_value: float
    discount_type: DiscountType = DiscountType.PERCENT
    quantity: int = 1
    tax_rate: float = 0.0
    shipping_cost: float = 0.0
    additional_coupon: float = 0.0  # percent, stacked after the primary discount
    currency: str = "USD"           # label only
    target_price: float = 0.0       # amount paid (DISCOUNT) or known final price (ORIGINAL)
    deal_type: DealType = DealType.STANDARD
    item_name: str = ""

    def __post_init__(self):
        # Accept plain strings from forms, CSV rows and JSON bodies
        object.__setattr__(self, 'discount_type', DiscountType(self.discount_type))
        object.__setattr__(self, 'deal_type', DealType(self.deal_type))

    @classmethod
    def defaults(cls) -> 'PricingInput':
        """Initial form values: $100 item at 20% off."""
        return cls(original_price=100.0, discount_value=20.0)

    def replace(self, **changes) -> 'PricingInput':
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data['discount_type'] = self.discount_type.value
        data['deal_type'] = self.deal_type.value
        return data


@dataclass(frozen=True)
class PricingResult:
    """Complete result of a pricing calculation."""
    final_price: float
    total_cost: float
    total_saving: float
    tax_amount: float
    price_per_unit: float
    effective_discount_rate: float
    calculation_mode: CalculatorMode

    # Diagnostics, not part of the numeric outcome
    trace: list[TraceStep] = field(default_factory=list, compare=False, repr=False)
    warnings: list[str] = field(default_factory=list, compare=False)

    NUMERIC_FIELDS = (
        'final_price', 'total_cost', 'total_saving', 'tax_amount',
        'price_per_unit', 'effective_discount_rate',
    )

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """
        Convert to a JSON-safe dict.

        Non-finite figures (zero quantity, degenerate inputs) become None.
        """
        data = {}
        for name in self.NUMERIC_FIELDS:
            value = getattr(self, name)
            data[name] = value if math.isfinite(value) else None
        data['calculation_mode'] = self.calculation_mode.value
        data['warnings'] = list(self.warnings)
        return data
