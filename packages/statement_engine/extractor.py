"""
Turns classified source material into Transaction records.

Both paths (sheet rows and free text) funnel every candidate through
``record_to_result``, which returns a RecordResult instead of raising.
One malformed row or regex match is logged and skipped; it never costs
the rest of the document.
"""

from typing import Any, List, Optional, Sequence

import structlog

from .classifiers import determine_payment_method, is_withdrawal, suggest_category
from .core.config import EngineSettings, get_settings
from .models import ColumnMapping, RawRecord, RecordResult, Transaction
from .normalizer import clean_description, is_blank, normalize_amount, normalize_date
from .text_patterns import fallback_line_records, template_records

logger = structlog.get_logger(__name__)


def record_to_result(record: RawRecord, settings: EngineSettings) -> RecordResult:
    """Normalize and classify one candidate."""
    try:
        description = clean_description(
            record.description, max_length=settings.DESCRIPTION_MAX_LENGTH
        )
        if not is_withdrawal(record.type, record.amount, description):
            return RecordResult.skipped("credit", record.source)

        amount = normalize_amount(record.amount)
        if amount <= 0:
            return RecordResult.skipped("non-positive amount", record.source)

        # Fallback lines classify on the whole line, as the bank printed it
        context = record.context or description
        txn = Transaction(
            date=normalize_date(
                record.date,
                day_first=settings.DAY_FIRST,
                year_pivot=settings.TWO_DIGIT_YEAR_PIVOT,
            ),
            description=description,
            amount=amount,
            payment_method=determine_payment_method(context),
            suggested_category=suggest_category(context),
            raw_data=record.as_raw_data(),
        )
        return RecordResult.success(txn, record.source)

    except Exception as e:
        logger.warning(
            "record_parse_failed",
            source=record.source,
            origin=record.origin,
            error=str(e),
        )
        return RecordResult.skipped(f"error: {e}", record.source)


def _cell(row: Sequence[Any], index: int) -> Any:
    if index < 0 or index >= len(row):
        return ""
    return row[index]


def row_to_result(
    row: Sequence[Any], row_idx: int, mapping: ColumnMapping, settings: EngineSettings
) -> RecordResult:
    try:
        if not row or all(is_blank(cell) for cell in row):
            return RecordResult.skipped("empty row", row_idx)

        date_value = _cell(row, mapping.date_column)
        amount_value = _cell(row, mapping.amount_column)
        if is_blank(date_value) or is_blank(amount_value):
            return RecordResult.skipped("not a transaction row", row_idx)

        record = RawRecord(
            date=date_value,
            description=_cell(row, mapping.description_column),
            amount=amount_value,
            type=_cell(row, mapping.type_column),
            source=row_idx,
            origin="row",
        )
    except Exception as e:
        logger.warning("row_parse_failed", row=row_idx, error=str(e))
        return RecordResult.skipped(f"error: {e}", row_idx)

    return record_to_result(record, settings)


def extract_from_rows(
    rows: Sequence[Sequence[Any]],
    mapping: ColumnMapping,
    settings: Optional[EngineSettings] = None,
) -> List[RecordResult]:
    """One RecordResult per row below the header row, in sheet order."""
    settings = settings or get_settings()
    start = max(mapping.header_row, -1) + 1

    results = [
        row_to_result(rows[row_idx], row_idx, mapping, settings)
        for row_idx in range(start, len(rows))
    ]

    logger.info(
        "rows_extracted",
        rows=len(results),
        withdrawals=sum(1 for r in results if r.ok),
    )
    return results


def extract_from_text(
    text: str, settings: Optional[EngineSettings] = None
) -> List[RecordResult]:
    """
    Run every template over the text; fall back to line scanning if none
    of the template matches produced a withdrawal.
    """
    settings = settings or get_settings()

    candidates = template_records(text)
    results = [record_to_result(record, settings) for record in candidates]

    if not any(r.ok for r in results):
        logger.info("template_matches_empty", candidates=len(candidates))
        lines = fallback_line_records(text, min_length=settings.MIN_LINE_LENGTH)
        results = [record_to_result(record, settings) for record in lines]

    logger.info(
        "text_extracted",
        candidates=len(results),
        withdrawals=sum(1 for r in results if r.ok),
    )
    return results
