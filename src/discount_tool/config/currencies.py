"""
Currency catalogue for display.

Currency is a label on the calculation, never a conversion rate.
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class CurrencyOption:
    code: str
    symbol: str
    name: str
    locale: str


CURRENCIES = (
    CurrencyOption('USD', '$', 'US Dollar', 'en-US'),
    CurrencyOption('INR', '₹', 'Indian Rupee', 'en-IN'),
    CurrencyOption('EUR', '€', 'Euro', 'de-DE'),
    CurrencyOption('GBP', '£', 'British Pound', 'en-GB'),
    CurrencyOption('JPY', '¥', 'Japanese Yen', 'ja-JP'),
    CurrencyOption('CAD', 'C$', 'Canadian Dollar', 'en-CA'),
    CurrencyOption('AUD', 'A$', 'Australian Dollar', 'en-AU'),
)


def get_currency(code: str) -> CurrencyOption:
    """Look up a currency by code, falling back to USD."""
    code = str(code or '').strip().upper()
    for currency in CURRENCIES:
        if currency.code == code:
            return currency
    return CURRENCIES[0]


def format_currency(amount: float, code: str = 'USD') -> str:
    """Format an amount with its currency symbol, e.g. '₹1,234.50'."""
    if amount is None or not math.isfinite(amount):
        return "—"
    symbol = get_currency(code).symbol
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"
