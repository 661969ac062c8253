"""
Final withdrawal filter.

Runs after classification and drops anything that looks like income, a
balance/total line or an own-account transfer, and re-checks the
withdrawal type and a positive amount.
"""

import re
from typing import Iterable, List, Pattern, Tuple

import structlog

from .models import WITHDRAWAL, Transaction

logger = structlog.get_logger(__name__)

EXCLUDE_PATTERNS: Tuple[Pattern, ...] = (
    re.compile(r"salary|interest|dividend|refund|cashback", re.I),
    re.compile(r"opening balance|closing balance", re.I),
    re.compile(r"^\s*(?:balance|total)\s*:?\s*$", re.I),
    re.compile(r"transfer.*own.*account", re.I),
)


def is_excluded(description: str) -> bool:
    desc = description or ""
    return any(pattern.search(desc) for pattern in EXCLUDE_PATTERNS)


def filter_withdrawals(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Keep positive withdrawals whose description is not a known non-expense."""
    kept = []
    for txn in transactions:
        if is_excluded(txn.description):
            logger.debug("transaction_excluded", description=txn.description)
            continue
        if txn.type != WITHDRAWAL or txn.amount <= 0:
            continue
        kept.append(txn)
    return kept
