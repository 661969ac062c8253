"""Data model shared by the front ends, extractors and classifiers."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

UNRESOLVED = -1

WITHDRAWAL = "withdrawal"
DEFAULT_DESCRIPTION = "Transaction"
DEFAULT_CATEGORY = "Bank Transactions"


class PaymentMethod(str, Enum):
    """Closed set of payment methods a withdrawal can be tagged with."""

    UPI = "UPI"
    CARD = "Card"
    BANK = "Bank"
    CASH = "Cash"


@dataclass(frozen=True)
class RawRecord:
    """One candidate as found in the source, before any normalization.

    ``source`` is the row index (tabular) or the match offset (free text).
    """

    date: Any
    description: Any
    amount: Any
    type: Any = ""
    source: int = 0
    origin: str = ""  # template name, "row" or "line"
    context: str = ""  # text the payment/category classifiers read, if not the description

    def as_raw_data(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
        }


@dataclass(frozen=True)
class ColumnMapping:
    """Resolved statement columns; ``UNRESOLVED`` means "column absent"."""

    date_column: int = UNRESOLVED
    description_column: int = UNRESOLVED
    amount_column: int = UNRESOLVED
    type_column: int = UNRESOLVED
    header_row: int = UNRESOLVED

    FIELDS = ("date", "description", "amount", "type")

    def index_of(self, field_name: str) -> int:
        return getattr(self, f"{field_name}_column")

    def has(self, field_name: str) -> bool:
        return self.index_of(field_name) != UNRESOLVED

    @property
    def resolved_count(self) -> int:
        return sum(1 for name in self.FIELDS if self.has(name))

    def to_dict(self) -> Dict[str, int]:
        return {
            "dateColumn": self.date_column,
            "descriptionColumn": self.description_column,
            "amountColumn": self.amount_column,
            "typeColumn": self.type_column,
            "headerRow": self.header_row,
        }


@dataclass(frozen=True)
class Transaction:
    """A normalized withdrawal, the engine's only output type."""

    date: date
    description: str
    amount: float
    payment_method: PaymentMethod = PaymentMethod.BANK
    suggested_category: str = DEFAULT_CATEGORY
    type: str = WITHDRAWAL
    raw_data: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def dedup_key(self) -> Tuple[date, str, float]:
        """Structural identity used by the ledger for duplicate suppression."""
        return (self.date, self.description, self.amount)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ledger's import shape."""
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": self.amount,
            "paymentMethod": self.payment_method.value,
            "suggestedCategory": self.suggested_category,
            "type": self.type,
            "rawData": {k: _plain(v) for k, v in self.raw_data.items()},
        }


@dataclass(frozen=True)
class RecordResult:
    """Outcome of processing one RawRecord: a transaction or a skip reason."""

    transaction: Optional[Transaction] = None
    skip_reason: str = ""
    source: int = 0

    @property
    def ok(self) -> bool:
        return self.transaction is not None

    @classmethod
    def success(cls, transaction: Transaction, source: int = 0) -> "RecordResult":
        return cls(transaction=transaction, source=source)

    @classmethod
    def skipped(cls, reason: str, source: int = 0) -> "RecordResult":
        return cls(skip_reason=reason, source=source)


def collect_transactions(results: Iterable[RecordResult]) -> List[Transaction]:
    """Keep the successful results, preserving source order."""
    return [r.transaction for r in results if r.ok]


def _plain(value: Any) -> Any:
    # rawData must survive json.dumps; workbook cells may be Timestamps etc.
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)
