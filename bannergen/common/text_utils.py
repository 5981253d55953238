"""
Text Utilities

Helper functions for price cleaning, currency formatting and URL/filename handling.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from urllib.parse import quote

# Leading decimal number, same acceptance as JavaScript parseFloat on a cleaned string
_LEADING_NUMBER = re.compile(r'\d+(?:\.\d*)?|\.\d+')
_DIGIT_RUN = re.compile(r'(\d+)')


def parse_price(raw: str) -> float:
    """
    Parse a feed price string into a number.

    Every character other than digits, '.' and ',' is dropped, then the first
    comma is read as a decimal point. The longest leading number wins, so
    "6199999 ARS" -> 6199999.0 and "1234,50" -> 1234.5.

    Args:
        raw: Price text as found in the feed

    Returns:
        Parsed value, or 0.0 when nothing numeric is present
    """
    if not raw:
        return 0.0

    clean = re.sub(r'[^\d.,]', '', raw).replace(',', '.', 1)
    match = _LEADING_NUMBER.match(clean)
    if not match:
        return 0.0
    return float(match.group(0))


def first_int(text: str) -> Optional[int]:
    """Return the first run of digits in text as an int, or None."""
    if not text:
        return None
    match = _DIGIT_RUN.search(text)
    return int(match.group(1)) if match else None


def format_price(value: float) -> str:
    """
    Format an amount as Argentine pesos without minor units.

    Rounds half-up to an integer and groups thousands with '.',
    e.g. 6199999 -> "$ 6.199.999".
    """
    rounded = int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    grouped = f"{abs(rounded):,}".replace(",", ".")
    return f"{sign}$ {grouped}"


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the way JavaScript's encodeURIComponent does."""
    return quote(value, safe="-_.!~*'()")


def strip_query(url: str) -> str:
    """Drop everything from the first '?' on."""
    return url.split('?', 1)[0]


def sanitize_filename(name: str, default: str = "producto") -> str:
    """Replace characters that are unsafe in file names with underscores."""
    name = re.sub(r'[^A-Za-z0-9._-]', '_', name or "")
    name = name.strip("._")
    return name or default
