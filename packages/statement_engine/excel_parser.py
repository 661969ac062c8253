import io
from typing import Any, List, Optional

import msoffcrypto
import pandas as pd
import structlog

from .core.errors import InvalidPasswordError, PasswordRequiredError, StatementDecodeError

logger = structlog.get_logger(__name__)

# OLE2 Compound Document magic bytes; encrypted Office files use this container
_OLE2_MAGIC = b"\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1"

CSV_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


def _is_ole2(file_content: bytes) -> bool:
    """Check if file starts with the OLE2 magic bytes (encrypted or legacy .xls)."""
    return file_content[:8] == _OLE2_MAGIC


def _decrypt(file_content: bytes, password: Optional[str]) -> Optional[io.BytesIO]:
    """Decrypt an OLE2 container; None means it was a plain legacy workbook."""
    try:
        with io.BytesIO(file_content) as f:
            office_file = msoffcrypto.OfficeFile(f)
            if not office_file.is_encrypted():
                return None
            if not password:
                raise PasswordRequiredError()

            decrypted_workbook = io.BytesIO()
            office_file.load_key(password=password)
            office_file.decrypt(decrypted_workbook)
    except PasswordRequiredError:
        raise
    except Exception as e:
        msg = str(e).lower()
        if "password" in msg or "decrypt" in msg or "key" in msg:
            raise InvalidPasswordError() from e
        raise StatementDecodeError(f"Failed to decrypt file: {e}") from e

    decrypted_workbook.seek(0)
    return decrypted_workbook


def _frame_to_rows(df: pd.DataFrame) -> List[List[Any]]:
    """DataFrame cells to plain row lists, blanks as ""."""
    df = df.astype(object).where(pd.notna(df), "")
    return df.values.tolist()


def read_workbook_rows(file_content: bytes, password: Optional[str] = None) -> List[List[Any]]:
    """
    Decode the first worksheet of a workbook into rows of raw cells.

    Handles plain .xlsx, legacy .xls and password-protected workbooks.

    Raises:
        PasswordRequiredError: encrypted workbook and no password.
        InvalidPasswordError: the password did not decrypt it.
        StatementDecodeError: anything else that prevents reading the sheet.
    """
    engine = "openpyxl"
    workbook = io.BytesIO(file_content)

    if _is_ole2(file_content):
        decrypted = _decrypt(file_content, password)
        if decrypted is not None:
            workbook = decrypted
        else:
            # Unencrypted legacy .xls; let pandas pick its reader
            engine = None

    try:
        df = pd.read_excel(
            workbook, sheet_name=0, header=None, dtype=object, engine=engine
        )
    except Exception as e:
        raise StatementDecodeError(f"Failed to parse bank statement Excel file: {e}") from e

    rows = _frame_to_rows(df)
    logger.debug("workbook_preview", rows=len(rows), preview=[str(r) for r in rows[:5]])
    return rows


def _decode_text(file_content: bytes) -> str:
    for encoding in CSV_ENCODINGS:
        try:
            return file_content.decode(encoding)
        except UnicodeDecodeError:
            continue

    raise StatementDecodeError("Could not decode CSV file with any known encoding")


def read_csv_rows(file_content: bytes) -> List[List[Any]]:
    """
    Decode a CSV export into rows of raw string cells.

    Bank CSVs usually carry a ragged preamble (account holder, period, ...)
    above the table, so every row is padded to the widest line.
    """
    text = _decode_text(file_content)
    lines = text.splitlines()
    if not any(line.strip() for line in lines):
        return []
    width = max(line.count(",") for line in lines) + 1

    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            engine="python",
        )
    except Exception as e:
        raise StatementDecodeError(f"Failed to parse bank statement CSV file: {e}") from e

    return _frame_to_rows(df)
