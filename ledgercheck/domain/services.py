"""
Domain Services - Double-entry validation and voucher projection.
Pure functions over in-memory values: no logging, no settings lookups, no
exceptions for malformed input. Every failure comes back as an enum value.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal, localcontext

from .entities import (
    EntryMetadata,
    InvalidEntry,
    InvalidVoucher,
    LedgerTransactionLine,
    ProjectedLines,
    TransactionLine,
    ValidationResult,
    ValidEntry,
    Voucher,
)
from .value_objects import (
    DEFAULT_TOLERANCE,
    MONEY_CONTEXT,
    ZERO,
    EntryError,
    EntryTotals,
    LedgerState,
    LineError,
    MetadataError,
    VoucherError,
    VoucherTo,
    VoucherType,
    is_valid_amount,
    to_decimal,
    valid_or_zero,
)

MIN_LINES = 2


class EntryBalanceService:
    """
    Service - Balance check for multi-line journal entries.
    Total debit must equal total credit within `tolerance` (strict less-than),
    and every line must carry exactly one positive amount against an account.
    An entry with fewer than two lines reports TOO_FEW_LINES only.
    """

    def __init__(self, tolerance: Decimal = DEFAULT_TOLERANCE):
        tolerance = to_decimal(tolerance)
        if not tolerance.is_finite() or tolerance <= ZERO:
            raise ValueError(f"Balance tolerance must be a positive number, got {tolerance}")
        self.tolerance = tolerance

    def check_line(self, line: TransactionLine) -> frozenset[LineError]:
        errors: set[LineError] = set()
        debit, credit = line.debit_amount, line.credit_amount

        if not (is_valid_amount(debit) and is_valid_amount(credit)):
            errors.add(LineError.INVALID_AMOUNT)

        finite = [amount for amount in (debit, credit) if amount.is_finite()]
        if any(amount < ZERO for amount in finite):
            errors.add(LineError.NEGATIVE_AMOUNT)
        if len(finite) == 2:
            if debit > ZERO and credit > ZERO:
                errors.add(LineError.BOTH_AMOUNTS_SET)
            elif debit == ZERO and credit == ZERO:
                errors.add(LineError.NEITHER_AMOUNT_SET)

        if not (line.account_id or "").strip():
            errors.add(LineError.MISSING_ACCOUNT)

        return frozenset(errors)

    def compute_totals(self, lines: Iterable[TransactionLine]) -> EntryTotals:
        total_debit = ZERO
        total_credit = ZERO
        with localcontext(MONEY_CONTEXT):
            for line in lines:
                total_debit += valid_or_zero(line.debit_amount)
                total_credit += valid_or_zero(line.credit_amount)
            difference = abs(total_debit - total_credit)
        return EntryTotals(
            total_debit=total_debit,
            total_credit=total_credit,
            difference=difference,
            is_balanced=difference < self.tolerance,
        )

    def validate(
        self,
        lines: Sequence[TransactionLine],
        metadata: EntryMetadata | None = None,
    ) -> ValidationResult:
        """
        Validate a candidate line set. Collects every line and entry error in
        a single pass. `metadata` is accepted for call-site symmetry only;
        header checks live in `validate_metadata`.
        """
        lines = list(lines)
        line_errors: dict[int, frozenset[LineError]] = {}
        for index, line in enumerate(lines):
            errors = self.check_line(line)
            if errors:
                line_errors[index] = errors

        # Balance is only judged once a counterpart line exists
        entry_errors: set[EntryError] = set()
        totals = self.compute_totals(lines)
        if len(lines) < MIN_LINES:
            entry_errors.add(EntryError.TOO_FEW_LINES)
        elif not totals.is_balanced:
            entry_errors.add(EntryError.UNBALANCED)

        if line_errors or entry_errors:
            return InvalidEntry(line_errors=line_errors, entry_errors=frozenset(entry_errors))
        return ValidEntry(total_debit=totals.total_debit, total_credit=totals.total_credit)

    @staticmethod
    def validate_metadata(metadata: EntryMetadata) -> frozenset[MetadataError]:
        errors: set[MetadataError] = set()
        if metadata.entry_date is None:
            errors.add(MetadataError.MISSING_ENTRY_DATE)
        if not (metadata.description or "").strip():
            errors.add(MetadataError.MISSING_DESCRIPTION)
        return frozenset(errors)


class VoucherProjectionService:
    """
    Service - Derive the balanced two-line journal entry implied by a voucher.
    PAYMENT: Dr expense / Cr cash. RECEIPT, DEPOSIT: Dr cash / Cr income.
    """

    def precondition_errors(self, voucher: Voucher) -> frozenset[VoucherError]:
        errors: set[VoucherError] = set()

        if not is_valid_amount(voucher.amount):
            errors.add(VoucherError.INVALID_AMOUNT)
        elif voucher.amount <= ZERO:
            errors.add(VoucherError.NON_POSITIVE_AMOUNT)

        cash = (voucher.cash_account_id or "").strip()
        counter = (voucher.counter_account_id or "").strip()
        if not cash:
            errors.add(VoucherError.MISSING_CASH_ACCOUNT)
        if not counter:
            errors.add(VoucherError.MISSING_COUNTER_ACCOUNT)
        if cash and cash == counter:
            errors.add(VoucherError.SAME_ACCOUNT)

        return frozenset(errors)

    def project(self, voucher: Voucher) -> ProjectedLines | InvalidVoucher:
        errors = self.precondition_errors(voucher)
        if errors:
            return InvalidVoucher(errors=errors)

        description = voucher.description or None
        if voucher.voucher_type.is_money_in:
            debit_account, credit_account = voucher.cash_account_id, voucher.counter_account_id
        else:
            debit_account, credit_account = voucher.counter_account_id, voucher.cash_account_id

        return ProjectedLines(
            debit=TransactionLine.debit(debit_account, voucher.amount, description),
            credit=TransactionLine.credit(credit_account, voucher.amount, description),
        )

    def validate_form(self, voucher: Voucher) -> frozenset[VoucherError]:
        errors = set(self.precondition_errors(voucher))
        if voucher.voucher_date is None:
            errors.add(VoucherError.MISSING_VOUCHER_DATE)
        if not (voucher.description or "").strip():
            errors.add(VoucherError.MISSING_DESCRIPTION)
        return frozenset(errors)

    @staticmethod
    def default_voucher_to(voucher_type: VoucherType) -> VoucherTo:
        # Payments usually go to vendors, receipts and deposits come from clients
        return VoucherTo.CLIENT if voucher_type.is_money_in else VoucherTo.VENDOR


def build_ledger_transactions(lines: Iterable[TransactionLine]) -> list[LedgerTransactionLine]:
    """Single-entry ledger payload for an already validated line set."""
    transactions = []
    for line in lines:
        if valid_or_zero(line.debit_amount) > ZERO:
            state, amount = LedgerState.DEBIT, line.debit_amount
        else:
            state, amount = LedgerState.CREDIT, valid_or_zero(line.credit_amount)
        transactions.append(
            LedgerTransactionLine(
                account_id=line.account_id,
                amount=amount,
                transaction_state=state,
                description=line.description,
            )
        )
    return transactions


_default_balance_service = EntryBalanceService()
_default_projection_service = VoucherProjectionService()


def validate_entry(
    lines: Sequence[TransactionLine],
    metadata: EntryMetadata | None = None,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> ValidationResult:
    service = _default_balance_service
    if to_decimal(tolerance) != service.tolerance:
        service = EntryBalanceService(tolerance)
    return service.validate(lines, metadata)


def compute_totals(
    lines: Iterable[TransactionLine],
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> EntryTotals:
    return EntryBalanceService(tolerance).compute_totals(lines)


def validate_metadata(metadata: EntryMetadata) -> frozenset[MetadataError]:
    return EntryBalanceService.validate_metadata(metadata)


def project_voucher(voucher: Voucher) -> ProjectedLines | InvalidVoucher:
    return _default_projection_service.project(voucher)


def validate_voucher_form(voucher: Voucher) -> frozenset[VoucherError]:
    return _default_projection_service.validate_form(voucher)


def default_voucher_to(voucher_type: VoucherType) -> VoucherTo:
    return VoucherProjectionService.default_voucher_to(voucher_type)
