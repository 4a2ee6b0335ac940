"""
API DTOs - Data Transfer Objects for API requests/responses.
Amounts are not range-checked here: negative or empty values must reach the
domain validators so they come back as per-line errors instead of a 422.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ledgercheck.domain import (
    EntryError,
    EntryMetadata,
    EntryTotals,
    JournalEntry,
    JournalStatus,
    LedgerState,
    LineError,
    MetadataError,
    RegisterFilter,
    RegisterType,
    TransactionLine,
    ValidationResult,
    Voucher,
    VoucherError,
    VoucherTo,
    VoucherType,
    default_voucher_to,
)


def _sorted_values(errors) -> list:
    return sorted(errors, key=lambda error: error.value)


class JournalLineDTO(BaseModel):
    """DTO - Journal entry line."""
    account_id: str = Field("", description="Ledger account reference")
    debit_amount: Decimal = Field(Decimal("0"), description="Debit amount")
    credit_amount: Decimal = Field(Decimal("0"), description="Credit amount")
    description: str | None = Field(None, description="Line narration")

    def to_domain(self) -> TransactionLine:
        return TransactionLine(
            account_id=self.account_id,
            debit_amount=self.debit_amount,
            credit_amount=self.credit_amount,
            description=self.description,
        )

    @classmethod
    def from_domain(cls, line: TransactionLine) -> "JournalLineDTO":
        return cls(
            account_id=line.account_id,
            debit_amount=line.debit_amount,
            credit_amount=line.credit_amount,
            description=line.description,
        )


class JournalEntryDTO(BaseModel):
    """DTO - Candidate journal entry from the entry form."""
    entry_date: date | None = Field(None, description="Entry date")
    description: str = Field("", max_length=500, description="Entry description")
    reference: str | None = Field(None, description="External reference")
    currency: str | None = Field(None, min_length=3, max_length=3, description="ISO 4217 code")
    status: JournalStatus = Field(JournalStatus.DRAFT, description="Current entry status")
    lines: list[JournalLineDTO] = Field(default_factory=list, description="Entry lines")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "entry_date": "2025-10-26",
            "description": "Office supplies purchase",
            "reference": "JE-00001",
            "currency": "USD",
            "lines": [
                {"account_id": "6010", "debit_amount": "500.00", "credit_amount": "0"},
                {"account_id": "1010", "debit_amount": "0", "credit_amount": "500.00"},
            ],
        }
    })

    def to_metadata(self, default_currency: str) -> EntryMetadata:
        return EntryMetadata(
            entry_date=self.entry_date,
            description=self.description,
            reference=self.reference,
            currency=(self.currency or default_currency).upper(),
        )

    def to_domain(self, default_currency: str) -> JournalEntry:
        return JournalEntry(
            metadata=self.to_metadata(default_currency),
            lines=tuple(line.to_domain() for line in self.lines),
            status=self.status,
        )


class EntryValidationDTO(BaseModel):
    """DTO - Validation result with live totals."""
    is_valid: bool
    is_balanced: bool
    total_debit: Decimal
    total_credit: Decimal
    difference: Decimal
    tolerance: Decimal
    line_errors: dict[int, list[LineError]] = {}
    entry_errors: list[EntryError] = []
    metadata_errors: list[MetadataError] = []

    @classmethod
    def from_result(
        cls,
        result: ValidationResult,
        totals: EntryTotals,
        tolerance: Decimal,
        metadata_errors=frozenset(),
    ) -> "EntryValidationDTO":
        line_errors = {}
        entry_errors = []
        if not result.is_valid:
            line_errors = {index: _sorted_values(errors) for index, errors in result.line_errors.items()}
            entry_errors = _sorted_values(result.entry_errors)
        return cls(
            is_valid=result.is_valid and not metadata_errors,
            is_balanced=totals.is_balanced,
            total_debit=totals.total_debit,
            total_credit=totals.total_credit,
            difference=totals.difference,
            tolerance=tolerance,
            line_errors=line_errors,
            entry_errors=entry_errors,
            metadata_errors=_sorted_values(metadata_errors),
        )


class LedgerTransactionDTO(BaseModel):
    """DTO - Single-entry ledger transaction for the accounting backend."""
    account_id: str
    amount: Decimal
    transaction_state: LedgerState
    description: str | None
    journal_entry_type: str

    model_config = ConfigDict(from_attributes=True)


class LedgerPayloadDTO(BaseModel):
    """DTO - Submission payload for a validated journal entry."""
    entry_date: date
    description: str
    reference: str | None
    total_amount: Decimal
    transactions: list[LedgerTransactionDTO]


class VoucherDTO(BaseModel):
    """DTO - Payment/receipt/deposit voucher from the voucher form."""
    voucher_type: VoucherType = Field(..., description="PAYMENT, RECEIPT or DEPOSIT")
    amount: Decimal = Field(..., description="Voucher amount")
    cash_account_id: str = Field("", description="Bank or cash account")
    counter_account_id: str = Field("", description="Expense (payment) or income (receipt) account")
    voucher_to: VoucherTo | None = Field(None, description="Beneficiary/payer type")
    voucher_date: date | None = Field(None, description="Voucher date")
    description: str = Field("", max_length=500, description="Voucher narration")
    reference: str | None = Field(None, description="External reference")
    beneficiary_name: str | None = Field(None, description="Beneficiary or payer name")
    party_id: str | None = Field(None, description="Client, vendor or staff reference")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "voucher_type": "PAYMENT",
            "amount": "250.00",
            "cash_account_id": "CASH",
            "counter_account_id": "RENT_EXPENSE",
            "voucher_to": "VENDOR",
            "voucher_date": "2025-10-21",
            "description": "Rent payment - October",
        }
    })

    def to_domain(self) -> Voucher:
        return Voucher(
            voucher_type=self.voucher_type,
            amount=self.amount,
            cash_account_id=self.cash_account_id,
            counter_account_id=self.counter_account_id,
            voucher_to=self.voucher_to or default_voucher_to(self.voucher_type),
            voucher_date=self.voucher_date,
            description=self.description,
            reference=self.reference,
            beneficiary_name=self.beneficiary_name,
            party_id=self.party_id,
        )


class VoucherProjectionDTO(BaseModel):
    """DTO - Projected journal lines for a voucher."""
    is_valid: bool
    voucher_type: VoucherType
    voucher_to: VoucherTo
    errors: list[VoucherError] = []
    form_errors: list[VoucherError] = []
    lines: list[JournalLineDTO] = []
    validation: EntryValidationDTO | None = None


class VoucherDefaultsDTO(BaseModel):
    voucher_type: VoucherType
    voucher_to: VoucherTo


class RegisterFilterDTO(BaseModel):
    """DTO - Register filter panel."""
    start_date: date | None = None
    end_date: date | None = None
    status: JournalStatus | None = None
    register_type: RegisterType | None = None
    account_id: str | None = None
    min_amount: Decimal | None = Field(None, ge=0)
    max_amount: Decimal | None = Field(None, ge=0)

    def to_domain(self) -> RegisterFilter:
        return RegisterFilter(**self.model_dump())


class RegisterEntryDTO(BaseModel):
    source_id: str
    status: str | None = Field(None, description="Raw backend status; overrides entry.status when set")
    entry: JournalEntryDTO


class RegisterVoucherDTO(BaseModel):
    source_id: str
    status: str | None = Field(None, description="Raw backend status, e.g. POSTED or CANCELLED")
    voucher: VoucherDTO


class RegisterRequestDTO(BaseModel):
    """DTO - Build a register page from entries and vouchers."""
    entries: list[RegisterEntryDTO] = []
    vouchers: list[RegisterVoucherDTO] = []
    filters: RegisterFilterDTO = Field(default_factory=RegisterFilterDTO)
    search: str | None = None
    page: int = 1
    page_size: int | None = None


class RegisterRowDTO(BaseModel):
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

    model_config = ConfigDict(from_attributes=True)


class RegisterPageDTO(BaseModel):
    rows: list[RegisterRowDTO]
    page: int
    page_size: int
    total_rows: int
    total_pages: int

    model_config = ConfigDict(from_attributes=True)
