"""Engine error taxonomy.

Only whole-document failures cross the engine boundary. Per-record
problems are absorbed by the extractors and show up as skipped records,
never as exceptions.
"""


class StatementError(Exception):
    """Base engine error."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class StatementDecodeError(StatementError):
    """The container (workbook, CSV, PDF) could not be decoded at all."""

    def __init__(self, detail: str = "Failed to decode bank statement"):
        super().__init__(detail=detail)


class PasswordRequiredError(StatementDecodeError):
    """Encrypted workbook supplied without a password."""

    def __init__(self, detail: str = "Password required"):
        super().__init__(detail=detail)


class InvalidPasswordError(StatementDecodeError):
    """Encrypted workbook could not be decrypted with the given password."""

    def __init__(self, detail: str = "Invalid password"):
        super().__init__(detail=detail)


class UnsupportedFormatError(StatementError):
    """The caller asked for a front end the engine does not have."""

    def __init__(self, file_format: str):
        self.file_format = file_format
        super().__init__(detail=f"Unsupported statement format: {file_format!r}")
