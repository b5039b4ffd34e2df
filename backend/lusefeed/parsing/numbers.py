from __future__ import annotations

import math
import re
from typing import Any, Literal, Union

from lusefeed.schemas.rows import EMPTY, Number


CURRENCY_RE = re.compile(r"^(?:ZMW|ZMK|USD|US\$|K|\$)\s*|\s*(?:ZMW|ZMK|USD)$", re.IGNORECASE)
INTEGER_RE = re.compile(r"^[+-]?\d+$")

Coerced = Union[Number, Literal[""]]


def _clean(value: Any) -> str:
    text = str(value).replace(",", "").replace("\u00a0", " ").strip()
    text = CURRENCY_RE.sub("", text).strip()
    return text.replace(" ", "")


def coerce_number(value: Any) -> Coerced:
    """Parse a loosely formatted number, returning EMPTY when it is not one.

    Grouping commas, whitespace and currency prefixes are ignored, so
    ``"1,234.5"`` and ``"K 1,234.5"`` both give ``1234.5``. Whole numbers
    written without a decimal point come back as ``int``.
    """
    if value is None or isinstance(value, bool):
        return EMPTY
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return EMPTY
        return value

    text = _clean(value)
    if not text:
        return EMPTY
    try:
        number = float(text)
    except ValueError:
        return EMPTY
    if not math.isfinite(number):
        return EMPTY
    if INTEGER_RE.match(text):
        return int(text)
    return number


def coerce_count(value: Any) -> Union[int, Literal[""]]:
    number = coerce_number(value)
    if number == EMPTY or number < 0:
        return EMPTY
    if isinstance(number, float):
        if not number.is_integer():
            return EMPTY
        return int(number)
    return number


def coerce_amount(value: Any) -> Coerced:
    number = coerce_number(value)
    if number == EMPTY or number < 0:
        return EMPTY
    return number


def format_change(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return EMPTY
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return EMPTY
        return f"{value:+.2f}%"
    return " ".join(str(value).split())
