"""
API Routers - Voucher projection preview.
"""

import logging

from fastapi import APIRouter, Depends

from ledgercheck.application.dto.accounting_dto import (
    EntryValidationDTO,
    JournalLineDTO,
    VoucherDefaultsDTO,
    VoucherDTO,
    VoucherProjectionDTO,
)
from ledgercheck.core.config import Settings, get_settings
from ledgercheck.domain import (
    EntryBalanceService,
    InvalidVoucher,
    VoucherProjectionService,
    VoucherType,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/vouchers", tags=["Vouchers"])


@router.post("/project", response_model=VoucherProjectionDTO)
def project_voucher(
    dto: VoucherDTO,
    settings: Settings = Depends(get_settings),
):
    """
    Project a voucher into its two-line journal entry.

    - PAYMENT: Dr expense account / Cr bank-cash account
    - RECEIPT, DEPOSIT: Dr bank-cash account / Cr income account
    """
    voucher = dto.to_domain()
    service = VoucherProjectionService()
    form_errors = sorted(service.validate_form(voucher), key=lambda error: error.value)
    projected = service.project(voucher)

    if isinstance(projected, InvalidVoucher):
        logger.info(
            "voucher projection refused",
            extra={
                "voucher_type": voucher.voucher_type.value,
                "errors": sorted(error.value for error in projected.errors),
            },
        )
        return VoucherProjectionDTO(
            is_valid=False,
            voucher_type=voucher.voucher_type,
            voucher_to=voucher.voucher_to,
            errors=sorted(projected.errors, key=lambda error: error.value),
            form_errors=form_errors,
        )

    lines = list(projected)
    tolerance = settings.tolerance_for(None)
    balance_service = EntryBalanceService(tolerance)
    validation = EntryValidationDTO.from_result(
        balance_service.validate(lines),
        balance_service.compute_totals(lines),
        tolerance,
    )

    logger.info(
        "voucher projected",
        extra={"voucher_type": voucher.voucher_type.value, "form_errors": len(form_errors)},
    )
    return VoucherProjectionDTO(
        is_valid=validation.is_valid and not form_errors,
        voucher_type=voucher.voucher_type,
        voucher_to=voucher.voucher_to,
        form_errors=form_errors,
        lines=[JournalLineDTO.from_domain(line) for line in lines],
        validation=validation,
    )


@router.get("/defaults/{voucher_type}", response_model=VoucherDefaultsDTO)
def voucher_defaults(voucher_type: VoucherType):
    """Default beneficiary/payer type for a voucher type."""
    return VoucherDefaultsDTO(
        voucher_type=voucher_type,
        voucher_to=VoucherProjectionService.default_voucher_to(voucher_type),
    )
