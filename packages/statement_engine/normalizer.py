"""
Cell/text normalization for statement values.

Converts raw date and amount tokens (workbook cells, regex captures, text
fragments) into canonical values. Every function here degrades to a
default instead of raising: a bad cell costs one field, never a record.
"""

import re
import warnings
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import pandas as pd

from .models import DEFAULT_DESCRIPTION

# Spreadsheet serial dates count days from 1899-12-30 (Excel's 1900 system,
# including its phantom 1900-02-29).
EXCEL_EPOCH = datetime(1899, 12, 30)

_DAY_FIRST_LONG = re.compile(r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})")
_YEAR_FIRST = re.compile(r"(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})")
_DAY_FIRST_SHORT = re.compile(r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{2})")

_CURRENCY = re.compile(r"[₹$€£¥]|\b(?:rs\.?|inr)", re.IGNORECASE)
_SIGN_MARKER = re.compile(r"(?:dr|cr)\.?$", re.IGNORECASE)
_AMOUNT_NOISE = re.compile(r"[,\s()+\-]")

_DISALLOWED_CHARS = re.compile(r"[^\w\s@/.()\-]|_")
_WHITESPACE = re.compile(r"\s+")

_DATE_SHAPE = re.compile(r"\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}|\d{4}[/\-]\d{1,2}[/\-]\d{1,2}")
_AMOUNT_SHAPE = re.compile(r"^\d+\.?\d*$")


def is_blank(value: Any) -> bool:
    """True for None, NaN/NaT and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _expand_year(year: str, pivot: int) -> int:
    yy = int(year)
    if len(year) == 2:
        return 2000 + yy if yy < pivot else 1900 + yy
    return yy


def _from_serial(value: float) -> Optional[date]:
    try:
        return (EXCEL_EPOCH + timedelta(days=float(value))).date()
    except (OverflowError, ValueError):
        return None


def _from_string(text: str, day_first: bool, year_pivot: int) -> Optional[date]:
    match = _DAY_FIRST_LONG.search(text)
    if match:
        first, second, year = match.groups()
        day, month = (first, second) if day_first else (second, first)
        try:
            return date(int(year), int(month), int(day))
        except ValueError:
            pass

    match = _YEAR_FIRST.search(text)
    if match:
        year, month, day = match.groups()
        try:
            return date(int(year), int(month), int(day))
        except ValueError:
            pass

    match = _DAY_FIRST_SHORT.search(text)
    if match:
        first, second, year = match.groups()
        day, month = (first, second) if day_first else (second, first)
        try:
            return date(_expand_year(year, year_pivot), int(month), int(day))
        except ValueError:
            pass

    # Last resort: let pandas guess ("05 Mar 2024", "March 5, 2024", ...)
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(text, dayfirst=day_first)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date()


def normalize_date(
    value: Any, day_first: bool = True, year_pivot: int = 50
) -> date:
    """
    Convert a raw date token into a calendar date.

    Accepts datetime-like cells, spreadsheet serial numbers and strings.
    String formats are tried day-first, then year-first, then day-first
    with a two-digit year, then a generic parse.

    Returns:
        The parsed date, or today's date if nothing matched.
    """
    if is_blank(value):
        return date.today()

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    parsed = None
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        parsed = _from_serial(value)
    else:
        parsed = _from_string(str(value).strip(), day_first, year_pivot)

    return parsed or date.today()


def normalize_amount(value: Any) -> float:
    """
    Parse an amount token into a non-negative float.

    Currency symbols, thousands separators, parentheses, signs and trailing
    Dr/Cr markers are discarded; direction is decided elsewhere.
    """
    if is_blank(value) or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float, Decimal)):
        return abs(float(value))

    text = _CURRENCY.sub("", str(value).strip())
    text = _SIGN_MARKER.sub("", text.strip())
    text = _AMOUNT_NOISE.sub("", text)

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return 0.0
    if not amount.is_finite():
        return 0.0
    return abs(float(amount))


def clean_description(text: Any, max_length: int = 100) -> str:
    """Collapse whitespace, drop unusual characters and cap the length."""
    if is_blank(text):
        return DEFAULT_DESCRIPTION

    cleaned = _DISALLOWED_CHARS.sub("", str(text))
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    cleaned = cleaned[:max_length].strip()
    return cleaned or DEFAULT_DESCRIPTION


def looks_like_date(value: Any) -> bool:
    if isinstance(value, (datetime, date)):
        return True
    return bool(_DATE_SHAPE.search(str(value).strip()))


def looks_like_amount(value: Any) -> bool:
    if isinstance(value, bool) or is_blank(value):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    text = _CURRENCY.sub("", str(value).strip())
    text = re.sub(r"[,\s]", "", text)
    return bool(_AMOUNT_SHAPE.match(text))
