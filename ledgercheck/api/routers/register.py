"""
API Routers - Unified transaction register.
"""

import logging
from dataclasses import replace

from fastapi import APIRouter, Depends

from ledgercheck.application.dto.accounting_dto import RegisterPageDTO, RegisterRequestDTO
from ledgercheck.core.config import Settings, get_settings
from ledgercheck.domain import (
    filter_rows,
    map_status,
    paginate,
    rows_for_entry,
    rows_for_voucher,
    sort_rows,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Transaction register"])


@router.post("/register", response_model=RegisterPageDTO)
def transaction_register(
    dto: RegisterRequestDTO,
    settings: Settings = Depends(get_settings),
):
    """
    Flatten journal entries and vouchers into register rows.

    Rows are filtered, searched, sorted newest first and paginated.
    Vouchers that fail projection produce no rows.
    """
    rows = []
    for item in dto.entries:
        entry = item.entry.to_domain(settings.default_currency)
        if item.status is not None:
            entry = replace(entry, status=map_status(item.status))
        rows.extend(rows_for_entry(item.source_id, entry))
    for item in dto.vouchers:
        rows.extend(rows_for_voucher(item.source_id, item.voucher.to_domain(), map_status(item.status)))

    selected = sort_rows(filter_rows(rows, dto.filters.to_domain(), dto.search))
    page = paginate(selected, dto.page, dto.page_size or settings.page_size)

    logger.info(
        "register page built",
        extra={"total_rows": len(rows), "matching_rows": page.total_rows, "page": page.page},
    )
    return RegisterPageDTO.model_validate(page)
