import logging
from dataclasses import asdict
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from discount_tool import __version__
from discount_tool.api.history_api import router as history_router
from discount_tool.api.state import advisor, history, settings
from discount_tool.config.currencies import CURRENCIES
from discount_tool.engine import CalculatorMode, DealType, DiscountType, PricingInput, compute
from discount_tool.services.validation import validate_input

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Discount Calculator API",
    description="Deal pricing: final price, discount rate and original price recovery",
    version=__version__,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include calculation history API
app.include_router(history_router)


class CalcRequest(BaseModel):
    """Request model for a calculation."""
    mode: CalculatorMode = CalculatorMode.PRICE
    original_price: float = 0.0
    discount_value: float = 0.0
    discount_type: DiscountType = DiscountType.PERCENT
    quantity: int = 1
    tax_rate: float = 0.0
    shipping_cost: float = 0.0
    additional_coupon: float = 0.0
    currency: str = "USD"
    target_price: float = 0.0
    deal_type: DealType = DealType.STANDARD
    item_name: str = ""

    def to_input(self) -> PricingInput:
        return PricingInput(**self.model_dump(exclude={'mode', 'record', 'history_id'}))


class CalculateRequest(CalcRequest):
    record: bool = True


class AdviceRequest(CalcRequest):
    history_id: Optional[str] = None


class ValidationResponse(BaseModel):
    """Response model for validation."""
    valid: bool
    errors: list[str]
    warnings: list[str]


@app.get("/")
async def root():
    return {"status": "online", "message": "Discount Calculator API Active"}


@app.post("/calculate")
async def calculate(req: CalculateRequest):
    pricing_input = req.to_input()
    validation = validate_input(pricing_input, req.mode)
    result = compute(pricing_input, req.mode)

    history_id = None
    if req.record:
        history_id = history.add(pricing_input, result).id

    return {
        "result": result.to_dict(),
        "trace": [asdict(t) for t in result.trace],
        "validation": asdict(validation),
        "history_id": history_id,
    }


@app.post("/validate", response_model=ValidationResponse)
async def validate(req: CalcRequest):
    """Validate inputs without calculating."""
    result = validate_input(req.to_input(), req.mode)
    return ValidationResponse(
        valid=result.valid,
        errors=result.errors,
        warnings=result.warnings,
    )


@app.post("/advice")
async def advice(req: AdviceRequest):
    """Ask the deal advisor for a verdict on a calculation."""
    if req.history_id and history.get(req.history_id) is None:
        raise HTTPException(status_code=404, detail=f"History entry '{req.history_id}' not found")

    pricing_input = req.to_input()
    result = compute(pricing_input, req.mode)
    text = await advisor.request_advice(pricing_input, result)

    history_id = req.history_id
    if history_id:
        try:
            history.set_advice(history_id, text)
        except ValueError:
            # Entry cleared or evicted while the advisor was answering
            logger.warning("History entry %s gone; advice not stored", history_id)
            history_id = None

    return {"advice": text, "history_id": history_id}


@app.get("/currencies")
async def get_currencies():
    return [asdict(c) for c in CURRENCIES]


@app.get("/system/status")
async def get_status():
    return {
        "engine_active": True,
        "version": __version__,
        "advisor_available": advisor.available,
        "advisor_model": settings.advisor_model,
        "history_count": len(history),
        "history_limit": history.limit,
    }
