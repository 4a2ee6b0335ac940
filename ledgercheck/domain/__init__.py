"""Domain layer - Pure Python double-entry validation and voucher projection."""

from ledgercheck.domain.entities import (
    EntryMetadata,
    InvalidEntry,
    InvalidVoucher,
    JournalEntry,
    LedgerTransactionLine,
    ProjectedLines,
    TransactionLine,
    ValidationResult,
    ValidEntry,
    Voucher,
)
from ledgercheck.domain.register import (
    RegisterFilter,
    RegisterPage,
    RegisterRow,
    filter_rows,
    map_status,
    paginate,
    rows_for_entry,
    rows_for_voucher,
    sort_rows,
)
from ledgercheck.domain.services import (
    EntryBalanceService,
    VoucherProjectionService,
    build_ledger_transactions,
    compute_totals,
    default_voucher_to,
    project_voucher,
    validate_entry,
    validate_metadata,
    validate_voucher_form,
)
from ledgercheck.domain.value_objects import (
    DEFAULT_TOLERANCE,
    AccountId,
    EntryError,
    EntryTotals,
    JournalStatus,
    LedgerState,
    LineError,
    MetadataError,
    RegisterType,
    VoucherError,
    VoucherTo,
    VoucherType,
)
