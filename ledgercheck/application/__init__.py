"""Application layer - DTOs."""

from ledgercheck.application.dto.accounting_dto import (
    EntryValidationDTO,
    JournalEntryDTO,
    LedgerPayloadDTO,
    RegisterPageDTO,
    RegisterRequestDTO,
    VoucherDTO,
    VoucherProjectionDTO,
)
