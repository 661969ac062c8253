"""
Per-record classification: debit vs. credit, payment method, category.

The payment-method and category tables are ordered (pattern, result)
pairs. Order is priority: the first pattern that matches wins, so new
entries must be placed deliberately rather than appended.
"""

import re
from typing import Any, Pattern, Tuple

from .models import DEFAULT_CATEGORY, PaymentMethod
from .normalizer import is_blank

PAYMENT_METHOD_PATTERNS: Tuple[Tuple[Pattern, PaymentMethod], ...] = (
    (re.compile(r"upi|paytm|gpay|phonepe|bhim|@|/pay", re.I), PaymentMethod.UPI),
    (re.compile(r"card|visa|mastercard|atm|pos", re.I), PaymentMethod.CARD),
    (re.compile(r"neft|rtgs|imps|transfer|cheque|chq|tfr", re.I), PaymentMethod.BANK),
    (re.compile(r"cash|withdrawal|wd", re.I), PaymentMethod.CASH),
)

# Keyword checks used only when no pattern above matched
PAYMENT_METHOD_KEYWORDS: Tuple[Tuple[Tuple[str, ...], PaymentMethod], ...] = (
    (("atm", "cash"), PaymentMethod.CASH),
    (("card", "pos"), PaymentMethod.CARD),
    (("upi", "@"), PaymentMethod.UPI),
)

CATEGORY_PATTERNS: Tuple[Tuple[Pattern, str], ...] = (
    (
        re.compile(
            r"restaurant|food|cafe|pizza|burger|swiggy|zomato|dominos|mcdonald"
            r"|kfc|subway|dining|delivery",
            re.I,
        ),
        "Food & Dining",
    ),
    (
        re.compile(
            r"uber|ola|taxi|petrol|diesel|fuel|transport|bus|train|metro|parking",
            re.I,
        ),
        "Transportation",
    ),
    (
        re.compile(r"amazon|flipkart|myntra|shopping|mall|store|purchase|buy|shop", re.I),
        "Shopping",
    ),
    (
        re.compile(
            r"movie|cinema|netflix|spotify|game|entertainment|ticket|concert", re.I
        ),
        "Entertainment",
    ),
    (
        re.compile(r"electricity|water|gas|internet|mobile|phone|bill|recharge", re.I),
        "Utilities",
    ),
    (
        re.compile(r"hospital|doctor|medical|pharmacy|health|medicine|clinic", re.I),
        "Healthcare",
    ),
    (
        re.compile(
            r"school|college|university|education|course|book|tuition|fees", re.I
        ),
        "Education",
    ),
    (
        re.compile(r"grocery|supermarket|mart|vegetable|fruit|milk|bread", re.I),
        "Groceries",
    ),
    (re.compile(r"atm|withdrawal|cash", re.I), "ATM Withdrawal"),
    (re.compile(r"charge|fee|penalty|interest|maintenance", re.I), "Bank Charges"),
)

CATEGORIES: Tuple[str, ...] = tuple(c for _, c in CATEGORY_PATTERNS) + (
    DEFAULT_CATEGORY,
)

_DEBIT_MARKERS = ("dr", "debit")
_CREDIT_MARKERS = ("cr", "credit")
_DEBIT_WORDS = ("withdrawal", "debit", "payment")
_CREDIT_WORDS = ("salary", "interest", "credit", "deposit")


def _text(value: Any) -> str:
    return "" if is_blank(value) else str(value)


def is_withdrawal(type_value: Any, raw_amount: Any, description: Any) -> bool:
    """
    Decide whether a candidate is money leaving the account.

    Checked in order: explicit Dr/Cr marker, a minus sign on the raw amount
    token, debit words in the description, credit words in the
    description. Anything still undecided counts as a withdrawal.
    """
    type_str = _text(type_value).lower()
    if any(m in type_str for m in _DEBIT_MARKERS):
        return True
    if any(m in type_str for m in _CREDIT_MARKERS):
        return False

    # Must look at the raw token; normalize_amount has already dropped the sign
    if "-" in _text(raw_amount):
        return True

    desc = _text(description).lower()
    if any(w in desc for w in _DEBIT_WORDS):
        return True
    if any(w in desc for w in _CREDIT_WORDS):
        return False

    return True


def determine_payment_method(description: str) -> PaymentMethod:
    desc = (description or "").lower()

    for pattern, method in PAYMENT_METHOD_PATTERNS:
        if pattern.search(desc):
            return method

    for keywords, method in PAYMENT_METHOD_KEYWORDS:
        if any(k in desc for k in keywords):
            return method

    return PaymentMethod.BANK


def suggest_category(description: str) -> str:
    """Advisory spending category; never used for filtering."""
    desc = (description or "").lower()

    for pattern, category in CATEGORY_PATTERNS:
        if pattern.search(desc):
            return category

    return DEFAULT_CATEGORY
