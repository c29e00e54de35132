"""
Display helpers for rate disclosures and booking emails.
"""

from typing import Dict, Optional
from urllib.parse import quote

from ..schemas.speaker import Rate, Speaker


# Symbols used by the directory's currencies when rendered for an
# en-US audience.  Other valid ISO codes are shown as a code prefix.
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "AUD": "A$",
    "NZD": "NZ$",
    "JPY": "¥",
    "INR": "₹",
    "PHP": "₱",
    "VND": "₫",
    "KRW": "₩",
    "CAD": "CA$",
    "HKD": "HK$",
    "CNY": "CN¥",
    "TWD": "NT$",
    "MXN": "MX$",
    "BRL": "R$",
    "ILS": "₪",
}

ZERO_DECIMAL_CURRENCIES = {"JPY", "VND", "KRW"}


def format_money(currency: str, value: float) -> str:
    """Format an amount, e.g. ``format_money("USD", 1500)`` -> ``"$1,500.00"``.

    Codes that are not three letters cannot be formatted as a currency
    and fall back to ``"<code> 1,500"``.
    """
    value = value or 0
    code = (currency or "").upper()
    if len(code) != 3 or not code.isalpha():
        if float(value).is_integer():
            return f"{currency} {int(value):,}"
        return f"{currency} {value:,}"
    decimals = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    amount = f"{value:,.{decimals}f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{amount}"
    return f"{code} {amount}"


def rate_preview(rate: Optional[Rate]) -> Optional[str]:
    """Render a rate as ``"$1,000.00–$2,000.00 per talk"``.

    Returns ``None`` when there is no rate or no minimum.  A range is
    shown only when ``max`` differs from ``min``.
    """
    if rate is None or not rate.min:
        return None
    if rate.max and rate.max != rate.min:
        base = f"{format_money(rate.currency, rate.min)}–{format_money(rate.currency, rate.max)}"
    else:
        base = format_money(rate.currency, rate.min)
    return f"{base} {rate.unit}" if rate.unit else base


def booking_email(speaker: Speaker) -> Dict[str, str]:
    """Draft the inquiry email an organiser sends to book ``speaker``."""
    subject = f"EO APAC Speaker Inquiry: {speaker.name}"
    lines = [
        f"Dear {speaker.name},",
        "",
        "We are interested in the possibility of having you speak at an upcoming EO event.",
        "",
        "[Your event details here]",
        "",
    ]
    preview = rate_preview(speaker.rate)
    if preview:
        lines += [f"Your listed rate: {preview}", ""]
    lines += [
        "Could you please let us know your availability and requirements?",
        "",
        "Best regards,",
        "[Your Name]",
        "[Your Chapter]",
    ]
    body = "\n".join(lines)
    mailto = (
        f"mailto:{speaker.contact.email}"
        f"?subject={quote(subject, safe='')}&body={quote(body, safe='')}"
    )
    return {"to": speaker.contact.email, "subject": subject, "body": body, "mailto": mailto}
