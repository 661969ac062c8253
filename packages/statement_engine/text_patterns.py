"""
Transaction templates for free-text statements (PDF exports).

Each template is a regex with known capture-group positions for date,
description, amount and the Dr/Cr marker. All templates run over the
whole document and every match is kept; pruning is left to the debit
classifier and the exclusion filter. When no template matches anything,
``fallback_line_records`` scans the text one line at a time.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Pattern, Tuple

from .models import RawRecord


@dataclass(frozen=True)
class TransactionTemplate:
    name: str
    pattern: Pattern
    date_group: int
    description_group: int
    amount_group: int
    marker_group: int

    def records(self, text: str) -> Iterator[RawRecord]:
        for match in self.pattern.finditer(text):
            yield RawRecord(
                date=match.group(self.date_group),
                description=match.group(self.description_group),
                amount=match.group(self.amount_group),
                type=match.group(self.marker_group),
                source=match.start(),
                origin=self.name,
            )


# Currency amount with optional thousands grouping: 450.00, 1,250.00,
# 1,20,000.00 (lakh), 1,234,567.00. Never starts inside another number.
AMOUNT = r"(?<![\d,])(?:\d{1,3}(?:,\d{2,3})+|\d+)\.\d{2}"

# Most bank-specific first, most generic last
TRANSACTION_TEMPLATES: Tuple[TransactionTemplate, ...] = (
    # Federal Bank: txn date, value date, particulars, TFR, amount, balance, Dr/Cr
    TransactionTemplate(
        name="federal_tfr",
        pattern=re.compile(
            r"(\d{2}/\d{2}/\d{4})\s+(\d{2}/\d{2}/\d{4})\s+(.+?)\s+TFR\s+"
            r"(" + AMOUNT + r")\s+(" + AMOUNT + r")\s+(Dr|Cr)\b"
        ),
        date_group=1,
        description_group=3,
        amount_group=4,
        marker_group=6,
    ),
    TransactionTemplate(
        name="slash_date_marker_after",
        pattern=re.compile(
            r"(\d{1,2}/\d{1,2}/\d{4})\s+(.+?)\s+(" + AMOUNT + r")\s+(Dr|Debit)\b",
            re.I,
        ),
        date_group=1,
        description_group=2,
        amount_group=3,
        marker_group=4,
    ),
    TransactionTemplate(
        name="dash_date_marker_after",
        pattern=re.compile(
            r"(\d{1,2}-\d{1,2}-\d{4})\s+(.+?)\s+(" + AMOUNT + r")\s+(Dr|Debit)\b",
            re.I,
        ),
        date_group=1,
        description_group=2,
        amount_group=3,
        marker_group=4,
    ),
    TransactionTemplate(
        name="slash_date_marker_before",
        pattern=re.compile(
            r"(\d{1,2}/\d{1,2}/\d{4})\s+(.+?)\s+(Dr|Debit)\s+(" + AMOUNT + r")",
            re.I,
        ),
        date_group=1,
        description_group=2,
        amount_group=4,
        marker_group=3,
    ),
)

NON_TRANSACTION_MARKERS = (
    "opening balance",
    "closing balance",
    "page",
    "statement",
    "account",
)

_LINE_DATE = re.compile(r"\d{1,2}[/\-]\d{1,2}[/\-]\d{4}")
_LINE_AMOUNT = re.compile(AMOUNT)
_LINE_DEBIT = re.compile(r"(?<![a-z])(?:dr|debit|withdrawal)(?![a-z])", re.I)
_LINE_DIRECTION = re.compile(r"(?<![a-z])(?:dr|cr|debit|credit)(?![a-z])", re.I)


def template_records(text: str) -> List[RawRecord]:
    """Every match of every template, template order then match order."""
    records: List[RawRecord] = []
    for template in TRANSACTION_TEMPLATES:
        records.extend(template.records(text))
    return records


def is_skippable_line(line: str, min_length: int = 10) -> bool:
    lower = line.strip().lower()
    if len(lower) < min_length:
        return True
    return any(marker in lower for marker in NON_TRANSACTION_MARKERS)


def description_from_line(line: str, date_token: str, amount_tokens: List[str]) -> str:
    """Whatever is left of the line once date, amounts and Dr/Cr words go."""
    remainder = line.replace(date_token, "", 1)
    for token in amount_tokens:
        remainder = remainder.replace(token, "", 1)
    return _LINE_DIRECTION.sub("", remainder)


def fallback_line_records(text: str, min_length: int = 10) -> List[RawRecord]:
    """
    Line-by-line scan used when no template matched.

    A line counts when it holds a date, at least one currency-shaped
    number and a debit word. The last number on the line is the amount.
    """
    records: List[RawRecord] = []
    offset = 0
    for line in text.splitlines(keepends=True):
        start, offset = offset, offset + len(line)
        if is_skippable_line(line, min_length):
            continue

        date_match = _LINE_DATE.search(line)
        amounts = _LINE_AMOUNT.findall(line)
        debit_match = _LINE_DEBIT.search(line)
        if not (date_match and amounts and debit_match):
            continue

        records.append(
            RawRecord(
                date=date_match.group(0),
                description=description_from_line(line, date_match.group(0), amounts),
                amount=amounts[-1],
                type=debit_match.group(0),
                source=start,
                origin="line",
                context=line.strip(),
            )
        )
    return records
