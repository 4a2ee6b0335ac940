"""
Transaction register - unified list of journal entry lines and voucher lines.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from .entities import InvalidVoucher, JournalEntry, TransactionLine, Voucher
from .services import project_voucher
from .value_objects import ZERO, JournalStatus, RegisterType, valid_or_zero

_STATUS_ALIASES = {
    "CANCELLED": JournalStatus.REVERSED,
}


@dataclass(frozen=True, slots=True)
class RegisterRow:
    row_id: str
    row_date: date | None
    transaction_id: str
    description: str
    account_id: str
    debit_amount: Decimal
    credit_amount: Decimal
    status: JournalStatus
    register_type: RegisterType
    source_id: str

    @property
    def amount(self) -> Decimal:
        return self.debit_amount if self.debit_amount > ZERO else self.credit_amount


@dataclass(frozen=True, slots=True)
class RegisterFilter:
    start_date: date | None = None
    end_date: date | None = None
    status: JournalStatus | None = None
    register_type: RegisterType | None = None
    account_id: str | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None

    def matches(self, row: RegisterRow) -> bool:
        if self.status is not None and row.status != self.status:
            return False
        if self.register_type is not None and row.register_type != self.register_type:
            return False
        if self.start_date is not None and (row.row_date is None or row.row_date < self.start_date):
            return False
        if self.end_date is not None and (row.row_date is None or row.row_date > self.end_date):
            return False
        if self.account_id and row.account_id != self.account_id:
            return False
        if self.min_amount is not None and row.amount < self.min_amount:
            return False
        if self.max_amount is not None and row.amount > self.max_amount:
            return False
        return True


@dataclass(frozen=True, slots=True)
class RegisterPage:
    rows: list[RegisterRow]
    page: int
    page_size: int
    total_rows: int
    total_pages: int


def map_status(raw: str | None) -> JournalStatus:
    """Normalize a backend status string. Unknown values fall back to DRAFT."""
    value = (raw or "").strip().upper()
    if value in _STATUS_ALIASES:
        return _STATUS_ALIASES[value]
    try:
        return JournalStatus(value)
    except ValueError:
        return JournalStatus.DRAFT


def _short_id(source_id: str) -> str:
    return (source_id[:5].upper() if source_id else "") or "00000"


def _row(
    row_id: str,
    line: TransactionLine,
    *,
    row_date: date | None,
    transaction_id: str,
    description: str,
    status: JournalStatus,
    register_type: RegisterType,
    source_id: str,
) -> RegisterRow:
    return RegisterRow(
        row_id=row_id,
        row_date=row_date,
        transaction_id=transaction_id,
        description=line.description or description,
        account_id=line.account_id,
        debit_amount=valid_or_zero(line.debit_amount),
        credit_amount=valid_or_zero(line.credit_amount),
        status=status,
        register_type=register_type,
        source_id=source_id,
    )


def rows_for_entry(source_id: str, entry: JournalEntry) -> list[RegisterRow]:
    """One register row per journal entry line."""
    metadata = entry.metadata
    transaction_id = metadata.reference or f"JE-{_short_id(source_id)}"
    return [
        _row(
            f"{source_id}-{index}",
            line,
            row_date=metadata.entry_date,
            transaction_id=transaction_id,
            description=metadata.description,
            status=entry.status,
            register_type=RegisterType.JOURNAL_ENTRY,
            source_id=source_id,
        )
        for index, line in enumerate(entry.lines)
    ]


def rows_for_voucher(
    source_id: str,
    voucher: Voucher,
    status: JournalStatus = JournalStatus.DRAFT,
) -> list[RegisterRow]:
    """Register rows for the projected voucher lines. Invalid vouchers yield none."""
    projected = project_voucher(voucher)
    if isinstance(projected, InvalidVoucher):
        return []

    register_type = RegisterType.RECEIPT if voucher.voucher_type.is_money_in else RegisterType.PAYMENT
    prefix = voucher.voucher_type.register_prefix
    transaction_id = voucher.reference or f"{prefix}-{_short_id(source_id)}"
    return [
        _row(
            f"{source_id}-{side}",
            line,
            row_date=voucher.voucher_date,
            transaction_id=transaction_id,
            description=voucher.description,
            status=status,
            register_type=register_type,
            source_id=source_id,
        )
        for side, line in zip(("debit", "credit"), projected)
    ]


def matches_search(row: RegisterRow, search: str | None) -> bool:
    if not search:
        return True
    query = search.strip().lower()
    haystack = (
        row.transaction_id,
        row.description,
        row.account_id,
        str(row.debit_amount),
        str(row.credit_amount),
    )
    return any(query in value.lower() for value in haystack)


def filter_rows(
    rows: Iterable[RegisterRow],
    register_filter: RegisterFilter | None = None,
    search: str | None = None,
) -> list[RegisterRow]:
    register_filter = register_filter or RegisterFilter()
    return [row for row in rows if register_filter.matches(row) and matches_search(row, search)]


def sort_rows(rows: Iterable[RegisterRow]) -> list[RegisterRow]:
    """Newest first; undated rows go last. Stable for equal dates."""
    rows = list(rows)
    dated = [row for row in rows if row.row_date is not None]
    undated = [row for row in rows if row.row_date is None]
    return sorted(dated, key=lambda row: row.row_date, reverse=True) + undated


def paginate(rows: list[RegisterRow], page: int, page_size: int) -> RegisterPage:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    start = (page - 1) * page_size
    return RegisterPage(
        rows=rows[start:start + page_size],
        page=page,
        page_size=page_size,
        total_rows=len(rows),
        total_pages=math.ceil(len(rows) / page_size),
    )
