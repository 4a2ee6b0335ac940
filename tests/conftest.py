"""
Pytest configuration and fixtures.
"""

from datetime import date
from decimal import Decimal

import pytest

from ledgercheck.core.config import get_settings
from ledgercheck.domain.entities import EntryMetadata, JournalEntry, TransactionLine, Voucher
from ledgercheck.domain.value_objects import JournalStatus, VoucherTo, VoucherType


@pytest.fixture
def entry_metadata() -> EntryMetadata:
    return EntryMetadata(
        entry_date=date(2025, 10, 26),
        description="Office supplies purchase",
        reference="JE-00001",
        currency="USD",
    )


@pytest.fixture
def balanced_lines() -> list[TransactionLine]:
    return [
        TransactionLine(account_id="A", debit_amount=Decimal("100"), credit_amount=Decimal("0")),
        TransactionLine(account_id="B", debit_amount=Decimal("0"), credit_amount=Decimal("100")),
    ]


@pytest.fixture
def balanced_entry(entry_metadata, balanced_lines) -> JournalEntry:
    return JournalEntry(metadata=entry_metadata, lines=balanced_lines, status=JournalStatus.POSTED)


@pytest.fixture
def payment_voucher() -> Voucher:
    return Voucher(
        voucher_type=VoucherType.PAYMENT,
        amount=Decimal("250"),
        cash_account_id="CASH",
        counter_account_id="RENT_EXPENSE",
        voucher_to=VoucherTo.VENDOR,
        voucher_date=date(2025, 10, 21),
        description="Rent payment - October",
    )


@pytest.fixture
def receipt_voucher() -> Voucher:
    return Voucher(
        voucher_type=VoucherType.RECEIPT,
        amount=Decimal("80"),
        cash_account_id="CASH",
        counter_account_id="SALES_INCOME",
        voucher_to=VoucherTo.CLIENT,
        voucher_date=date(2025, 10, 25),
        description="Client payment received",
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
