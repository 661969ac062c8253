"""
Header detection for tabular statements.

Finds the header row among the first few rows of a sheet and maps the
date, description, amount and Dr/Cr columns. Detection never fails: when
nothing looks like a header, row 0 is assumed and whatever resolves from
it (plus positional guesses) is returned.
"""

import re
from typing import Any, Dict, List, Optional, Sequence

import structlog

from .models import UNRESOLVED, ColumnMapping
from .normalizer import is_blank, looks_like_amount, looks_like_date

logger = structlog.get_logger(__name__)

EXACT_HEADERS: Dict[str, tuple] = {
    "date": ("date",),
    "description": ("particulars", "narration"),
    "amount": ("withdrawals", "debit", "dr"),
    "type": ("dr/cr", "type", "tran type"),
}

FUZZY_HEADERS: Dict[str, tuple] = {
    "date": ("date", "transaction date", "value date", "posting date", "txn date"),
    "description": (
        "description",
        "particulars",
        "narration",
        "transaction details",
        "remarks",
    ),
    "amount": ("amount", "debit", "withdrawal", "withdrawals", "dr"),
    "type": ("type", "dr/cr", "transaction type", "tran type"),
}

MIN_HEADER_FIELDS = 2


_SLASH_SPACING = re.compile(r"\s*/\s*")


def _normalize_header(cell: Any) -> str:
    if is_blank(cell):
        return ""
    # "Dr / Cr", "Tran  Type" -> "dr/cr", "tran type"
    text = " ".join(str(cell).lower().split())
    return _SLASH_SPACING.sub("/", text)


def _normalize_cells(row: Sequence[Any]) -> List[str]:
    return [_normalize_header(cell) for cell in row]


def _exact_pass(cells: List[str]) -> Dict[str, int]:
    found: Dict[str, int] = {}
    for idx, cell in enumerate(cells):
        for field_name, names in EXACT_HEADERS.items():
            # Later columns override earlier ones
            if cell in names:
                found[field_name] = idx
    return found


def _fuzzy_pass(cells: List[str], found: Dict[str, int]) -> Dict[str, int]:
    found = dict(found)
    claimed = set(found.values())
    for field_name, keywords in FUZZY_HEADERS.items():
        if field_name in found:
            continue
        for idx, cell in enumerate(cells):
            if idx in claimed or not cell:
                continue
            if any(k in cell for k in keywords):
                found[field_name] = idx
                claimed.add(idx)
                break
    return found


def _positional_defaults(
    found: Dict[str, int], sample: Optional[Sequence[Any]]
) -> Dict[str, int]:
    """Guess columns for a sheet without a usable header row."""
    found = dict(found)
    found.setdefault("date", 0)
    if not sample:
        return found

    claimed = set(found.values())
    if "amount" not in found:
        for idx, cell in enumerate(sample):
            if idx not in claimed and looks_like_amount(cell):
                found["amount"] = idx
                claimed.add(idx)
                break
    if "description" not in found:
        for idx, cell in enumerate(sample):
            if idx in claimed or is_blank(cell):
                continue
            if not looks_like_date(cell) and not looks_like_amount(cell):
                found["description"] = idx
                break
    return found


def _build(found: Dict[str, int], header_row: int) -> ColumnMapping:
    return ColumnMapping(
        date_column=found.get("date", UNRESOLVED),
        description_column=found.get("description", UNRESOLVED),
        amount_column=found.get("amount", UNRESOLVED),
        type_column=found.get("type", UNRESOLVED),
        header_row=header_row,
    )


def detect_columns(rows: Sequence[Sequence[Any]], scan_rows: int = 10) -> ColumnMapping:
    """
    Locate the header row and map the four semantic columns.

    Args:
        rows: Sheet rows, each a sequence of raw cell values ("" for blanks).
        scan_rows: How many leading rows may hold the header.

    Returns:
        ColumnMapping. Earliest qualifying row wins; unresolved columns are
        UNRESOLVED.
    """
    for row_idx, row in enumerate(rows[:scan_rows]):
        if not row:
            continue
        cells = _normalize_cells(row)
        found = _fuzzy_pass(cells, _exact_pass(cells))
        if len(found) >= MIN_HEADER_FIELDS:
            mapping = _build(found, row_idx)
            logger.debug("header_row_detected", **mapping.to_dict())
            return mapping

    # No header within the window: treat row 0 as the header, exact names only
    first = rows[0] if len(rows) > 0 else []
    found = _exact_pass(_normalize_cells(first))
    sample = rows[1] if len(rows) > 1 else None
    mapping = _build(_positional_defaults(found, sample), 0)
    logger.info("header_row_not_found", **mapping.to_dict())
    return mapping
