"""
History API - FastAPI router for past calculations.
"""
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from ..engine import compute
from .state import history

router = APIRouter(prefix="/api/history", tags=["history"])


class HistoryEntryResponse(BaseModel):
    """Response model for a history entry."""
    id: str
    timestamp: int
    calculation_mode: str
    original_price: float
    discount_value: float
    discount_type: str
    quantity: int
    tax_rate: float
    shipping_cost: float
    additional_coupon: float
    currency: str
    target_price: float
    deal_type: str
    item_name: str
    final_price: Optional[float]
    total_cost: Optional[float]
    total_saving: Optional[float]
    tax_amount: Optional[float]
    price_per_unit: Optional[float]
    effective_discount_rate: Optional[float]
    ai_advice: Optional[str]


# Endpoints

@router.get("", response_model=list[HistoryEntryResponse])
async def list_history():
    """List past calculations, newest first."""
    return [HistoryEntryResponse(**asdict(entry)) for entry in history.list_entries()]


@router.get("/export")
async def export_history():
    """Download the history as CSV."""
    return Response(
        content=history.to_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=history.csv"},
    )


@router.get("/{entry_id}", response_model=HistoryEntryResponse)
async def get_entry(entry_id: str):
    """Get a single past calculation by ID."""
    entry = history.get(entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail=f"History entry '{entry_id}' not found")
    return HistoryEntryResponse(**asdict(entry))


@router.post("/{entry_id}/recalculate")
async def recalculate_entry(entry_id: str):
    """Re-run a past calculation with its stored inputs."""
    entry = history.get(entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail=f"History entry '{entry_id}' not found")
    result = compute(entry.to_input(), entry.calculation_mode)
    return result.to_dict()


@router.delete("")
async def clear_history():
    """Delete every past calculation."""
    count = len(history)
    history.clear()
    return {"success": True, "message": f"Cleared {count} entries"}
