"""
Unit tests - Transaction register rows, filters and paging.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from ledgercheck.domain.entities import JournalEntry, TransactionLine
from ledgercheck.domain.register import (
    RegisterFilter,
    filter_rows,
    map_status,
    paginate,
    rows_for_entry,
    rows_for_voucher,
    sort_rows,
)
from ledgercheck.domain.value_objects import JournalStatus, RegisterType, VoucherType


@pytest.fixture
def register_rows(balanced_entry, payment_voucher, receipt_voucher):
    rows = rows_for_entry("je1234567", balanced_entry)
    rows += rows_for_voucher("pv998877", payment_voucher, JournalStatus.PENDING)
    rows += rows_for_voucher("rv112233", receipt_voucher, JournalStatus.POSTED)
    return rows


class TestRowsForEntry:

    def test_one_row_per_line(self, balanced_entry):
        rows = rows_for_entry("je1234567", balanced_entry)

        assert [row.row_id for row in rows] == ["je1234567-0", "je1234567-1"]
        assert [(row.account_id, row.debit_amount, row.credit_amount) for row in rows] == [
            ("A", Decimal("100"), Decimal("0")),
            ("B", Decimal("0"), Decimal("100")),
        ]
        assert all(row.register_type == RegisterType.JOURNAL_ENTRY for row in rows)
        assert all(row.status == JournalStatus.POSTED for row in rows)

    def test_reference_is_transaction_id(self, balanced_entry):
        rows = rows_for_entry("je1234567", balanced_entry)

        assert {row.transaction_id for row in rows} == {"JE-00001"}
        assert rows[0].description == "Office supplies purchase"

    def test_generated_transaction_id(self, balanced_entry):
        entry = JournalEntry(
            metadata=replace(balanced_entry.metadata, reference=None),
            lines=balanced_entry.lines,
        )

        assert rows_for_entry("abcdef99", entry)[0].transaction_id == "JE-ABCDE"

    def test_line_description_wins(self, entry_metadata):
        entry = JournalEntry(
            metadata=entry_metadata,
            lines=[
                TransactionLine("A", debit_amount=5, description="Toner"),
                TransactionLine("B", credit_amount=5),
            ],
        )

        rows = rows_for_entry("x", entry)
        assert [row.description for row in rows] == ["Toner", "Office supplies purchase"]


class TestRowsForVoucher:

    def test_payment_rows(self, payment_voucher):
        rows = rows_for_voucher("pv998877", payment_voucher, JournalStatus.PENDING)

        assert [(row.account_id, row.debit_amount, row.credit_amount) for row in rows] == [
            ("RENT_EXPENSE", Decimal("250"), Decimal("0")),
            ("CASH", Decimal("0"), Decimal("250")),
        ]
        assert {row.transaction_id for row in rows} == {"PV-PV998"}
        assert {row.register_type for row in rows} == {RegisterType.PAYMENT}

    def test_deposit_is_listed_as_receipt(self, receipt_voucher):
        deposit = replace(receipt_voucher, voucher_type=VoucherType.DEPOSIT, reference="DEP-7")

        rows = rows_for_voucher("dep1", deposit)
        assert {row.register_type for row in rows} == {RegisterType.RECEIPT}
        assert {row.transaction_id for row in rows} == {"DEP-7"}
        assert {row.status for row in rows} == {JournalStatus.DRAFT}

    def test_invalid_voucher_has_no_rows(self, payment_voucher):
        assert rows_for_voucher("bad", replace(payment_voucher, amount=Decimal("0"))) == []


class TestStatusMapping:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("posted", JournalStatus.POSTED),
            ("PENDING", JournalStatus.PENDING),
            (" Reversed ", JournalStatus.REVERSED),
            ("CANCELLED", JournalStatus.REVERSED),
            ("APPROVED", JournalStatus.DRAFT),
            ("", JournalStatus.DRAFT),
            (None, JournalStatus.DRAFT),
        ],
    )
    def test_map_status(self, raw, expected):
        assert map_status(raw) == expected

    def test_editable_statuses(self):
        assert JournalStatus.DRAFT.is_editable is True
        assert JournalStatus.PENDING.is_editable is True
        assert JournalStatus.POSTED.is_editable is False
        assert JournalStatus.REVERSED.is_editable is False


class TestFiltering:

    def test_no_filter_keeps_everything(self, register_rows):
        assert filter_rows(register_rows) == register_rows

    def test_filter_by_status_and_type(self, register_rows):
        rows = filter_rows(register_rows, RegisterFilter(status=JournalStatus.POSTED))
        assert {row.source_id for row in rows} == {"je1234567", "rv112233"}

        rows = filter_rows(register_rows, RegisterFilter(register_type=RegisterType.PAYMENT))
        assert {row.source_id for row in rows} == {"pv998877"}

    def test_filter_by_date_range(self, register_rows):
        rows = filter_rows(
            register_rows,
            RegisterFilter(start_date=date(2025, 10, 22), end_date=date(2025, 10, 25)),
        )

        assert {row.source_id for row in rows} == {"rv112233"}

    def test_filter_by_account(self, register_rows):
        rows = filter_rows(register_rows, RegisterFilter(account_id="CASH"))

        assert len(rows) == 2
        assert {row.source_id for row in rows} == {"pv998877", "rv112233"}

    def test_filter_by_amount_uses_non_zero_side(self, register_rows):
        rows = filter_rows(register_rows, RegisterFilter(min_amount=Decimal("90"), max_amount=Decimal("200")))

        assert {row.source_id for row in rows} == {"je1234567"}

    @pytest.mark.parametrize("search", ["rent", "PV-PV998", "250", "sales_income"])
    def test_search(self, register_rows, search):
        rows = filter_rows(register_rows, search=search)

        assert rows
        assert all(
            search.lower() in " ".join(
                [row.transaction_id, row.description, row.account_id, str(row.debit_amount), str(row.credit_amount)]
            ).lower()
            for row in rows
        )


class TestSortingAndPaging:

    def test_newest_first_undated_last(self, register_rows, entry_metadata):
        undated = rows_for_entry(
            "nodate",
            JournalEntry(
                metadata=replace(entry_metadata, entry_date=None),
                lines=[TransactionLine("X", debit_amount=1), TransactionLine("Y", credit_amount=1)],
            ),
        )

        rows = sort_rows(undated + register_rows)
        assert [row.source_id for row in rows] == [
            "je1234567", "je1234567",
            "rv112233", "rv112233",
            "pv998877", "pv998877",
            "nodate", "nodate",
        ]

    def test_sort_keeps_line_order_within_a_transaction(self, register_rows):
        rows = sort_rows(register_rows)

        assert [row.row_id for row in rows[:2]] == ["je1234567-0", "je1234567-1"]

    def test_paginate(self, register_rows):
        page = paginate(register_rows, page=2, page_size=4)

        assert page.total_rows == 6
        assert page.total_pages == 2
        assert len(page.rows) == 2
        assert page.rows == register_rows[4:]

    def test_paginate_empty(self):
        page = paginate([], page=1, page_size=10)

        assert page.rows == []
        assert page.total_pages == 0

    @pytest.mark.parametrize("page, page_size", [(0, 10), (1, 0)])
    def test_paginate_rejects_bad_arguments(self, page, page_size):
        with pytest.raises(ValueError, match="must be >= 1"):
            paginate([], page=page, page_size=page_size)
