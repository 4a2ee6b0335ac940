"""
Domain Layer - Value objects for double-entry validation.
Closed enums for voucher/entry classification and the structured error sets
returned to the form layer.
"""

from dataclasses import dataclass
from decimal import Context, Decimal, InvalidOperation
from enum import Enum
from typing import NewType

AccountId = NewType("AccountId", str)

ZERO = Decimal("0")
DEFAULT_TOLERANCE = Decimal("0.01")

# Amounts stay below 10**16 with at most 12 decimal places. Within those
# bounds MONEY_CONTEXT sums any realistic number of lines exactly.
MAX_AMOUNT_ADJUSTED_EXPONENT = 15
MAX_AMOUNT_SCALE = 12
MONEY_CONTEXT = Context(prec=60)


class VoucherType(str, Enum):
    """Single-purpose voucher kinds."""
    PAYMENT = "PAYMENT"  # Money out: debit expense, credit cash
    RECEIPT = "RECEIPT"  # Money in: debit cash, credit income
    DEPOSIT = "DEPOSIT"  # Money in, same polarity as RECEIPT

    @property
    def is_money_in(self) -> bool:
        return self is not VoucherType.PAYMENT

    @property
    def register_prefix(self) -> str:
        return "RV" if self.is_money_in else "PV"


class VoucherTo(str, Enum):
    """Counterparty classification, display/audit only."""
    CLIENT = "CLIENT"
    VENDOR = "VENDOR"
    STAFF = "STAFF"
    OTHER = "OTHER"


class JournalStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    POSTED = "POSTED"
    REVERSED = "REVERSED"

    @property
    def is_editable(self) -> bool:
        return self not in (JournalStatus.POSTED, JournalStatus.REVERSED)


class LedgerState(str, Enum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class RegisterType(str, Enum):
    JOURNAL_ENTRY = "JOURNAL_ENTRY"
    PAYMENT = "PAYMENT"
    RECEIPT = "RECEIPT"


class LineError(str, Enum):
    """Per-line validation failures."""
    BOTH_AMOUNTS_SET = "BOTH_AMOUNTS_SET"
    NEITHER_AMOUNT_SET = "NEITHER_AMOUNT_SET"
    NEGATIVE_AMOUNT = "NEGATIVE_AMOUNT"
    MISSING_ACCOUNT = "MISSING_ACCOUNT"
    INVALID_AMOUNT = "INVALID_AMOUNT"  # NaN, Infinity or out of range


class EntryError(str, Enum):
    """Whole-entry validation failures."""
    TOO_FEW_LINES = "TOO_FEW_LINES"
    UNBALANCED = "UNBALANCED"


class MetadataError(str, Enum):
    MISSING_ENTRY_DATE = "MISSING_ENTRY_DATE"
    MISSING_DESCRIPTION = "MISSING_DESCRIPTION"


class VoucherError(str, Enum):
    """Voucher projection and form failures."""
    SAME_ACCOUNT = "SAME_ACCOUNT"
    NON_POSITIVE_AMOUNT = "NON_POSITIVE_AMOUNT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    MISSING_CASH_ACCOUNT = "MISSING_CASH_ACCOUNT"
    MISSING_COUNTER_ACCOUNT = "MISSING_COUNTER_ACCOUNT"
    MISSING_VOUCHER_DATE = "MISSING_VOUCHER_DATE"
    MISSING_DESCRIPTION = "MISSING_DESCRIPTION"


def to_decimal(value: object) -> Decimal:
    """
    Coerce an amount to Decimal through its string form, so 33.33 stays
    33.33 instead of its binary expansion. Unparseable input becomes NaN
    and is reported by the validators as an invalid amount.
    """
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        return Decimal("NaN")
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("NaN")


def is_valid_amount(amount: Decimal) -> bool:
    """Finite, below 10**16 and with no more than 12 significant decimal places."""
    if not amount.is_finite():
        return False
    if amount.is_zero():
        return True
    _, digits, exponent = amount.as_tuple()
    significant = "".join(map(str, digits)).rstrip("0")
    trailing_zeros = len(digits) - len(significant)
    return (
        amount.adjusted() <= MAX_AMOUNT_ADJUSTED_EXPONENT
        and exponent + trailing_zeros >= -MAX_AMOUNT_SCALE
    )


def valid_or_zero(amount: Decimal) -> Decimal:
    """Amount as it counts towards totals. Invalid amounts count as zero."""
    if amount.is_zero() or not is_valid_amount(amount):
        return ZERO
    return amount


@dataclass(frozen=True, slots=True)
class EntryTotals:
    """Live totals for a candidate line set."""
    total_debit: Decimal
    total_credit: Decimal
    difference: Decimal
    is_balanced: bool
