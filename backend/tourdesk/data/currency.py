"""Currency utilities — symbols and display formatting."""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$", "CAD": "CA$", "GBP": "£", "EUR": "€",
    "JPY": "¥", "AUD": "A$", "SGD": "S$", "HKD": "HK$",
    "INR": "₹", "AED": "AED", "QAR": "QAR", "TRY": "TRY",
    "KRW": "₩", "TWD": "NT$", "SOS": "Sh.So.", "KES": "KSh",
}

# Currencies quoted without minor units
ZERO_DECIMAL_CURRENCIES: frozenset[str] = frozenset({"JPY", "KRW"})


def currency_symbol(currency: str) -> str:
    """Get the display symbol for a currency. Unknown codes render as 'XYZ '."""
    return CURRENCY_SYMBOLS.get(currency.upper(), currency.upper() + " ")


def format_currency(amount: float | Decimal, currency: str = "USD") -> str:
    """Format an amount with currency symbol and thousands separators.

    format_currency(1234.5, "USD") -> "$1,234.50"
    format_currency(-20, "EUR")    -> "-€20.00"
    """
    code = currency.upper()
    places = Decimal("1") if code in ZERO_DECIMAL_CURRENCIES else Decimal("0.01")
    value = Decimal(str(amount)).quantize(places, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.0f}" if code in ZERO_DECIMAL_CURRENCIES else f"{abs(value):,.2f}"
    return f"{sign}{currency_symbol(code)}{digits}"
