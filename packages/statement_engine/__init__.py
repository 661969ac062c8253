"""
Statement Engine

Withdrawal extraction, normalization and classification for bank statements.
"""

__version__ = "0.1.0"

from .core.errors import StatementDecodeError, StatementError
from .models import ColumnMapping, PaymentMethod, Transaction
from .parser import (
    StatementParser,
    parse_bank_statement,
    parse_csv_statement,
    parse_excel_statement,
    parse_pdf_statement,
    parse_text_statement,
    transactions_to_frame,
)

__all__ = [
    "StatementParser",
    "parse_bank_statement",
    "parse_excel_statement",
    "parse_csv_statement",
    "parse_pdf_statement",
    "parse_text_statement",
    "transactions_to_frame",
    "Transaction",
    "ColumnMapping",
    "PaymentMethod",
    "StatementError",
    "StatementDecodeError",
]
