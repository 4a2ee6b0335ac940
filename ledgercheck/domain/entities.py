"""
Domain Entities - Transaction lines, journal entries and vouchers.
All entities are transient, immutable value holders: an edit produces a new
candidate that is validated again from scratch.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import NamedTuple

from .value_objects import (
    ZERO,
    AccountId,
    EntryError,
    JournalStatus,
    LedgerState,
    LineError,
    VoucherError,
    VoucherTo,
    VoucherType,
    to_decimal,
)


@dataclass(frozen=True, slots=True)
class TransactionLine:
    """One debit or credit row of a journal entry."""
    account_id: AccountId
    debit_amount: Decimal = ZERO
    credit_amount: Decimal = ZERO
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "account_id", AccountId(self.account_id or ""))
        object.__setattr__(self, "debit_amount", to_decimal(self.debit_amount))
        object.__setattr__(self, "credit_amount", to_decimal(self.credit_amount))

    @classmethod
    def debit(cls, account_id: str, amount, description: str | None = None) -> "TransactionLine":
        return cls(AccountId(account_id), debit_amount=amount, description=description)

    @classmethod
    def credit(cls, account_id: str, amount, description: str | None = None) -> "TransactionLine":
        return cls(AccountId(account_id), credit_amount=amount, description=description)


@dataclass(frozen=True, slots=True)
class EntryMetadata:
    """Journal entry header."""
    entry_date: date | None
    description: str = ""
    reference: str | None = None
    currency: str = "USD"


@dataclass(frozen=True, slots=True)
class JournalEntry:
    """
    Entity - Multi-line journal entry.
    Double-entry: total debit = total credit, at least two lines.
    """
    metadata: EntryMetadata
    lines: tuple[TransactionLine, ...] = ()
    status: JournalStatus = JournalStatus.DRAFT

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "status", JournalStatus(self.status))

    def with_lines(self, lines) -> "JournalEntry":
        return JournalEntry(metadata=self.metadata, lines=tuple(lines), status=self.status)


@dataclass(frozen=True, slots=True)
class Voucher:
    """
    Entity - Payment/receipt/deposit voucher.
    Always involves one cash/bank account and one expense or income account.
    """
    voucher_type: VoucherType
    amount: Decimal
    cash_account_id: AccountId
    counter_account_id: AccountId
    voucher_to: VoucherTo = VoucherTo.OTHER
    voucher_date: date | None = None
    description: str = ""
    reference: str | None = None
    beneficiary_name: str | None = None
    party_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "voucher_type", VoucherType(self.voucher_type))
        object.__setattr__(self, "voucher_to", VoucherTo(self.voucher_to))
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "cash_account_id", AccountId(self.cash_account_id or ""))
        object.__setattr__(self, "counter_account_id", AccountId(self.counter_account_id or ""))


class ProjectedLines(NamedTuple):
    """Balanced two-line projection of a voucher, debit line first."""
    debit: TransactionLine
    credit: TransactionLine


@dataclass(frozen=True, slots=True)
class ValidEntry:
    total_debit: Decimal
    total_credit: Decimal

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class InvalidEntry:
    """Every problem found in one pass, keyed by 0-based line index."""
    line_errors: dict[int, frozenset[LineError]] = field(default_factory=dict)
    entry_errors: frozenset[EntryError] = frozenset()

    @property
    def is_valid(self) -> bool:
        return False


ValidationResult = ValidEntry | InvalidEntry


@dataclass(frozen=True, slots=True)
class InvalidVoucher:
    errors: frozenset[VoucherError]

    @property
    def is_valid(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class LedgerTransactionLine:
    """Single-entry ledger transaction as submitted to the accounting backend."""
    account_id: AccountId
    amount: Decimal
    transaction_state: LedgerState
    description: str | None = None
    journal_entry_type: str = "SINGLE_ENTRY"
