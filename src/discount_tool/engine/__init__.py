"""Engine subpackage - core pricing computation."""
from .pricing_engine import compute
from .models import (
    CalculatorMode,
    DealType,
    DiscountType,
    PricingInput,
    PricingResult,
    TraceStep,
)

__all__ = [
    'compute',
    'CalculatorMode',
    'DealType',
    'DiscountType',
    'PricingInput',
    'PricingResult',
    'TraceStep',
]
