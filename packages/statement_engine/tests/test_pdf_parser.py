from unittest.mock import MagicMock, patch

import pytest

from packages.statement_engine.core.errors import StatementDecodeError
from packages.statement_engine.pdf_parser import extract_pdf_text


def _page(text):
    page = MagicMock()
    page.extract_text.return_value = text
    return page


@patch("packages.statement_engine.pdf_parser.pdfplumber.open")
def test_pages_joined_with_newlines(mock_open):
    mock_open.return_value.__enter__.return_value.pages = [
        _page("01/03/2024 SWIGGY 450.00 Dr"),
        _page(None),  # scanned page without a text layer
        _page("02/03/2024 UBER 200.00 Dr"),
    ]

    text = extract_pdf_text(b"%PDF-1.4 fake")

    assert text == "01/03/2024 SWIGGY 450.00 Dr\n\n02/03/2024 UBER 200.00 Dr"


@patch("packages.statement_engine.pdf_parser.pdfplumber.open")
def test_open_failure_is_fatal(mock_open):
    mock_open.side_effect = Exception("No /Root object! - Is this really a PDF?")

    with pytest.raises(StatementDecodeError, match="Failed to parse bank statement PDF"):
        extract_pdf_text(b"garbage")


def test_unreadable_bytes():
    with pytest.raises(StatementDecodeError):
        extract_pdf_text(b"definitely not a pdf")
