"""
Bank Statement Parser - withdrawal extraction for arbitrary statement layouts.

Supports: Excel workbooks (first sheet), CSV exports and PDF statements.
Features: header detection, date/amount normalization, debit detection,
          payment-method and category tagging, non-expense exclusion.

The caller picks the front end; the engine never sniffs the format.
"""

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import structlog

from .columns import detect_columns
from .core.config import EngineSettings, get_settings
from .core.errors import UnsupportedFormatError
from .core.logging import document_context
from .excel_parser import read_csv_rows, read_workbook_rows
from .exclusion import filter_withdrawals
from .extractor import extract_from_rows, extract_from_text
from .models import Transaction, collect_transactions
from .pdf_parser import extract_pdf_text

logger = structlog.get_logger(__name__)

SUPPORTED_FORMATS = ("excel", "csv", "pdf")


def parse_rows(
    rows: Sequence[Sequence[Any]], settings: Optional[EngineSettings] = None
) -> List[Transaction]:
    """Tabular path: header detection, row extraction, exclusion."""
    settings = settings or get_settings()

    mapping = detect_columns(rows, scan_rows=settings.HEADER_SCAN_ROWS)
    logger.info("column_mapping_detected", **mapping.to_dict())

    extracted = collect_transactions(extract_from_rows(rows, mapping, settings))
    withdrawals = filter_withdrawals(extracted)

    logger.info(
        "statement_parsed",
        source="rows",
        extracted=len(extracted),
        withdrawals=len(withdrawals),
    )
    return withdrawals


def parse_text_statement(
    text: str, settings: Optional[EngineSettings] = None
) -> List[Transaction]:
    """Free-text path: template matching (or line fallback), exclusion."""
    settings = settings or get_settings()

    extracted = collect_transactions(extract_from_text(text, settings))
    withdrawals = filter_withdrawals(extracted)

    logger.info(
        "statement_parsed",
        source="text",
        extracted=len(extracted),
        withdrawals=len(withdrawals),
    )
    return withdrawals


def parse_excel_statement(
    file_content: bytes,
    password: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> List[Transaction]:
    return parse_rows(read_workbook_rows(file_content, password=password), settings)


def parse_csv_statement(
    file_content: bytes, settings: Optional[EngineSettings] = None
) -> List[Transaction]:
    return parse_rows(read_csv_rows(file_content), settings)


def parse_pdf_statement(
    file_content: bytes, settings: Optional[EngineSettings] = None
) -> List[Transaction]:
    return parse_text_statement(extract_pdf_text(file_content), settings)


def transactions_to_frame(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """Tabulate transactions in the ledger import shape, one row each."""
    columns = [
        "date",
        "description",
        "amount",
        "paymentMethod",
        "suggestedCategory",
        "type",
        "rawData",
    ]
    return pd.DataFrame([t.to_dict() for t in transactions], columns=columns)


class StatementParser:
    """
    Main parser class for bank statements.

    Holds settings only; every call is independent, so one instance can
    serve many documents (and threads) at once.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize parser.

        Args:
            settings: Engine settings; loaded from the environment if omitted.
        """
        self.settings = settings or get_settings()

    def parse(
        self,
        file_content: bytes,
        file_format: str,
        password: Optional[str] = None,
    ) -> List[Transaction]:
        """
        Parse a statement with the front end named by ``file_format``.

        Args:
            file_content: Raw document bytes.
            file_format: "excel", "csv" or "pdf".
            password: Password for encrypted workbooks.

        Returns:
            Withdrawals in source order.
        """
        fmt = (file_format or "").lower()

        with document_context(fmt, len(file_content)):
            logger.info("statement_parse_started")
            if fmt == "excel":
                return parse_excel_statement(file_content, password, self.settings)
            if fmt == "csv":
                return parse_csv_statement(file_content, self.settings)
            if fmt == "pdf":
                return parse_pdf_statement(file_content, self.settings)

        raise UnsupportedFormatError(file_format)

    def parse_to_records(
        self,
        file_content: bytes,
        file_format: str,
        password: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Parse and return as list of dictionaries."""
        return [t.to_dict() for t in self.parse(file_content, file_format, password)]


def parse_bank_statement(
    file_content: bytes,
    file_format: str,
    password: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> List[Transaction]:
    """
    Convenience function to parse a bank statement.

    Args:
        file_content: File content as bytes
        file_format: Front end to use (excel, csv, pdf)
        password: Password for encrypted workbooks
        settings: Engine settings override

    Returns:
        List of withdrawal Transactions
    """
    return StatementParser(settings=settings).parse(
        file_content, file_format, password=password
    )
