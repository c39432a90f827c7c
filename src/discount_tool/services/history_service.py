"""
History Service - bounded record of past calculations.

Entries are kept newest first and capped at a fixed number; the oldest
entry is evicted on overflow. Optionally mirrored to a CSV file.
"""
import csv
import logging
import time
import uuid
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

import pandas as pd

from ..engine.models import CalculatorMode, PricingInput, PricingResult

logger = logging.getLogger(__name__)


@dataclass
class HistoryEntry:
    """A past calculation: its inputs, its result, and optional advice."""
    id: str
    timestamp: int  # epoch milliseconds
    calculation_mode: str

    # Inputs
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
    item_name: str = ""

    # Result
    final_price: Optional[float] = None
    total_cost: Optional[float] = None
    total_saving: Optional[float] = None
    tax_amount: Optional[float] = None
    price_per_unit: Optional[float] = None
    effective_discount_rate: Optional[float] = None

    ai_advice: Optional[str] = None

    @classmethod
    def create(
        cls,
        pricing_input: PricingInput,
        result: PricingResult,
        ai_advice: Optional[str] = None,
    ) -> 'HistoryEntry':
        """Build an entry with a fresh id and the current timestamp."""
        result_data = result.to_dict()
        result_data.pop('warnings')
        return cls(
            id=uuid.uuid4().hex,
            timestamp=int(time.time() * 1000),
            ai_advice=ai_advice,
            **pricing_input.to_dict(),
            **result_data,
        )

    def to_input(self) -> PricingInput:
        """Rebuild the inputs so the calculation can be re-run."""
        return PricingInput(
            original_price=self.original_price,
            discount_value=self.discount_value,
            discount_type=self.discount_type,
            quantity=self.quantity,
            tax_rate=self.tax_rate,
            shipping_cost=self.shipping_cost,
            additional_coupon=self.additional_coupon,
            currency=self.currency,
            target_price=self.target_price,
            deal_type=self.deal_type,
            item_name=self.item_name,
        )

    def to_csv_row(self) -> dict:
        """Convert to CSV row format."""
        row = asdict(self)
        return {k: '' if v is None else str(v) for k, v in row.items()}

    @classmethod
    def from_csv_row(cls, row: dict) -> 'HistoryEntry':
        """Create HistoryEntry from CSV row."""
        def opt_float(key):
            value = row.get(key)
            return float(value) if value else None

        return cls(
            id=row['id'],
            timestamp=int(row.get('timestamp') or 0),
            calculation_mode=CalculatorMode(row.get('calculation_mode', 'PRICE')).value,
            original_price=float(row.get('original_price') or 0),
            discount_value=float(row.get('discount_value') or 0),
            discount_type=row.get('discount_type') or 'percent',
            quantity=int(row.get('quantity') or 1),
            tax_rate=float(row.get('tax_rate') or 0),
            shipping_cost=float(row.get('shipping_cost') or 0),
            additional_coupon=float(row.get('additional_coupon') or 0),
            currency=row.get('currency') or 'USD',
            target_price=float(row.get('target_price') or 0),
            deal_type=row.get('deal_type') or 'standard',
            item_name=row.get('item_name') or '',
            final_price=opt_float('final_price'),
            total_cost=opt_float('total_cost'),
            total_saving=opt_float('total_saving'),
            tax_amount=opt_float('tax_amount'),
            price_per_unit=opt_float('price_per_unit'),
            effective_discount_rate=opt_float('effective_discount_rate'),
            ai_advice=row.get('ai_advice') or None,
        )


CSV_COLUMNS = list(HistoryEntry.__dataclass_fields__)


class HistoryStore:
    """In-memory calculation history, newest first, capped at `limit`."""

    def __init__(self, limit: int = 50, csv_path: Optional[Path] = None):
        self.limit = limit
        self.csv_path = csv_path
        self._entries: list[HistoryEntry] = []
        self._load()

    def _load(self):
        """Load entries from the CSV mirror if there is one."""
        if not self.csv_path or not self.csv_path.exists():
            return

        entries = []
        with open(self.csv_path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            for row in reader:
                if not row.get('id'):
                    continue
                try:
                    entries.append(HistoryEntry.from_csv_row(row))
                except ValueError as e:
                    logger.warning("Skipping unreadable history row %s: %s", row.get('id'), e)

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        self._entries = entries[:self.limit]
        logger.info("Loaded %d history entries from %s", len(self._entries), self.csv_path)

    def _write(self):
        """Write entries back to the CSV mirror."""
        if not self.csv_path:
            return
        self.csv_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.csv_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for entry in self._entries:
                writer.writerow(entry.to_csv_row())

    def __len__(self) -> int:
        return len(self._entries)

    def add(
        self,
        pricing_input: PricingInput,
        result: PricingResult,
        ai_advice: Optional[str] = None,
    ) -> HistoryEntry:
        """Record a calculation; evicts the oldest entries beyond the limit."""
        entry = HistoryEntry.create(pricing_input, result, ai_advice=ai_advice)
        self._entries.insert(0, entry)
        del self._entries[self.limit:]
        self._write()
        return entry

    def list_entries(self) -> list[HistoryEntry]:
        """All entries, newest first."""
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        """Get a single entry by ID."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def set_advice(self, entry_id: str, advice: str) -> HistoryEntry:
        """Attach deal advice to an existing entry."""
        entry = self.get(entry_id)
        if entry is None:
            raise ValueError(f"History entry '{entry_id}' not found")
        entry.ai_advice = advice
        self._write()
        return entry

    def clear(self):
        """Remove every entry."""
        self._entries = []
        self._write()

    def to_dataframe(self) -> pd.DataFrame:
        """History as a table, newest first."""
        df = pd.DataFrame([asdict(e) for e in self._entries], columns=CSV_COLUMNS)
        df['timestamp'] = pd.to_datetime(df['timestamp'], unit='ms')
        return df

    def to_csv(self) -> str:
        """History table serialized as CSV text."""
        return self.to_dataframe().to_csv(index=False)
