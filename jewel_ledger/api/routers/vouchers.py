"""
API Routers - Voucher and cheque endpoints.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jewel_ledger.api.dependencies import get_voucher_service
from jewel_ledger.application.bookkeeping import VoucherService, voucher_response
from jewel_ledger.application.dto.ledger_dto import (
    ChequeCashDTO,
    VoucherBatchCreateDTO,
    VoucherCreateDTO,
    VoucherResponseDTO,
)
from jewel_ledger.domain.value_objects import VoucherKind
from jewel_ledger.infrastructure.database import get_db

router = APIRouter(prefix="/api/v1", tags=["Vouchers"])


@router.post("/vouchers", response_model=VoucherResponseDTO, status_code=status.HTTP_201_CREATED)
def create_voucher(
    dto: VoucherCreateDTO,
    db: Session = Depends(get_db),
    service: VoucherService = Depends(get_voucher_service),
):
    """
    Create a voucher.

    - Market vouchers carry an MVN, every other type a description
    - GFV requires a gold rate greater than 0
    - a gold fixing paid by cheque requires bank, branch, cheque number and date
    """
    voucher = service.create(dto)
    db.commit()
    return voucher


@router.post(
    "/vouchers/batch",
    response_model=list[VoucherResponseDTO],
    status_code=status.HTTP_201_CREATED,
)
def create_vouchers_batch(
    dto: VoucherBatchCreateDTO,
    db: Session = Depends(get_db),
    service: VoucherService = Depends(get_voucher_service),
):
    """Create several vouchers in one transaction."""
    try:
        vouchers = service.create_batch(dto.vouchers)
    except Exception:
        db.rollback()
        raise
    db.commit()
    return vouchers


@router.get("/vouchers", response_model=list[VoucherResponseDTO])
def list_vouchers(
    account_id: UUID | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    kind: VoucherKind | None = None,
    service: VoucherService = Depends(get_voucher_service),
):
    return service.list_vouchers(account_id, start_date, end_date, kind)


@router.get("/vouchers/{voucher_id}", response_model=VoucherResponseDTO)
def get_voucher(voucher_id: UUID, service: VoucherService = Depends(get_voucher_service)):
    return voucher_response(service.get(voucher_id))


@router.put("/vouchers/{voucher_id}", response_model=VoucherResponseDTO)
def update_voucher(
    voucher_id: UUID,
    dto: VoucherCreateDTO,
    db: Session = Depends(get_db),
    service: VoucherService = Depends(get_voucher_service),
):
    """Replace a voucher; every later balance is recomputed on the next report."""
    voucher = service.update(voucher_id, dto)
    db.commit()
    return voucher


@router.delete("/vouchers/{voucher_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_voucher(
    voucher_id: UUID,
    db: Session = Depends(get_db),
    service: VoucherService = Depends(get_voucher_service),
):
    service.delete(voucher_id)
    db.commit()


@router.get("/cheques", response_model=list[VoucherResponseDTO])
def list_cheques(
    cashed: bool = Query(False, description="List cashed cheques instead of pending ones"),
    service: VoucherService = Depends(get_voucher_service),
):
    """Market receipts paid by cheque."""
    return service.list_cheques(cashed)


@router.post("/vouchers/{voucher_id}/cash", response_model=VoucherResponseDTO)
def cash_cheque(
    voucher_id: UUID,
    dto: ChequeCashDTO | None = None,
    db: Session = Depends(get_db),
    service: VoucherService = Depends(get_voucher_service),
):
    """Mark a cheque cashed; the gold enters the locker from now on."""
    voucher = service.mark_cashed(voucher_id, dto.cashed_date if dto else None)
    db.commit()
    return voucher
