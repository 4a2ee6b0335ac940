"""
API Routers - Journal entry validation and ledger payload preview.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ledgercheck.application.dto.accounting_dto import (
    EntryValidationDTO,
    JournalEntryDTO,
    LedgerPayloadDTO,
    LedgerTransactionDTO,
)
from ledgercheck.core.config import Settings, get_settings
from ledgercheck.domain import (
    EntryBalanceService,
    JournalEntry,
    build_ledger_transactions,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/journal-entries", tags=["Journal entries"])


def _validate(entry: JournalEntry, settings: Settings) -> EntryValidationDTO:
    tolerance = settings.tolerance_for(entry.metadata.currency)
    service = EntryBalanceService(tolerance)
    result = service.validate(entry.lines, entry.metadata)
    totals = service.compute_totals(entry.lines)
    metadata_errors = service.validate_metadata(entry.metadata)
    return EntryValidationDTO.from_result(result, totals, tolerance, metadata_errors)


@router.post("/validate", response_model=EntryValidationDTO)
def validate_journal_entry(
    dto: JournalEntryDTO,
    settings: Settings = Depends(get_settings),
):
    """
    Validate a candidate journal entry.

    - Every line needs an account and exactly one positive amount
    - At least two lines, total debit = total credit within tolerance
    - All problems are returned together; the response is always 200
    """
    entry = dto.to_domain(settings.default_currency)
    validation = _validate(entry, settings)

    logger.info(
        "journal entry validated",
        extra={
            "is_valid": validation.is_valid,
            "line_count": len(entry.lines),
            "lines_with_errors": len(validation.line_errors),
            "entry_errors": [error.value for error in validation.entry_errors],
        },
    )
    return validation


@router.post("/ledger-transactions", response_model=LedgerPayloadDTO)
def build_ledger_payload(
    dto: JournalEntryDTO,
    settings: Settings = Depends(get_settings),
):
    """
    Build the single-entry ledger payload for submission to the accounting backend.
    Refuses invalid entries (400) and posted or reversed entries (409).
    """
    entry = dto.to_domain(settings.default_currency)

    if not entry.status.is_editable:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Journal entry is {entry.status.value.lower()} and cannot be modified",
        )

    validation = _validate(entry, settings)
    if not validation.is_valid:
        logger.info(
            "ledger payload refused",
            extra={"entry_errors": [error.value for error in validation.entry_errors]},
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=validation.model_dump(mode="json"),
        )

    transactions = build_ledger_transactions(entry.lines)
    logger.debug("ledger payload built", extra={"transactions": len(transactions)})

    return LedgerPayloadDTO(
        entry_date=entry.metadata.entry_date,
        description=entry.metadata.description,
        reference=entry.metadata.reference,
        total_amount=validation.total_debit,
        transactions=[LedgerTransactionDTO.model_validate(tx) for tx in transactions],
    )
