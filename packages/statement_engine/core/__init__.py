"""Settings, logging and errors shared by the statement engine."""

from .config import EngineSettings, get_settings
from .errors import (
    InvalidPasswordError,
    PasswordRequiredError,
    StatementDecodeError,
    StatementError,
    UnsupportedFormatError,
)
from .logging import document_context, setup_logging

__all__ = [
    "EngineSettings",
    "get_settings",
    "setup_logging",
    "document_context",
    "StatementError",
    "StatementDecodeError",
    "PasswordRequiredError",
    "InvalidPasswordError",
    "UnsupportedFormatError",
]
