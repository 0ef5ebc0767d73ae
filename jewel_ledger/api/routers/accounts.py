"""
API Routers - Account endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jewel_ledger.api.dependencies import get_account_service
from jewel_ledger.application.bookkeeping import AccountService
from jewel_ledger.application.dto.ledger_dto import (
    AccountCreateDTO,
    AccountResponseDTO,
    AccountUpdateDTO,
)
from jewel_ledger.domain.value_objects import AccountType
from jewel_ledger.infrastructure.database import get_db

router = APIRouter(prefix="/api/v1/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponseDTO, status_code=status.HTTP_201_CREATED)
def create_account(
    dto: AccountCreateDTO,
    db: Session = Depends(get_db),
    service: AccountService = Depends(get_account_service),
):
    """
    Create an account.

    - account_no is the next number in the account type's sequence
    - numbers are unique per type, not across types
    """
    account = service.create(dto)
    db.commit()
    return account


@router.get("", response_model=list[AccountResponseDTO])
def list_accounts(
    account_type: AccountType | None = Query(None, description="Filter by account type"),
    active_only: bool = False,
    service: AccountService = Depends(get_account_service),
):
    return service.list_accounts(account_type, active_only)


@router.get("/{account_id}", response_model=AccountResponseDTO)
def get_account(account_id: UUID, service: AccountService = Depends(get_account_service)):
    return AccountResponseDTO.model_validate(service.get(account_id))


@router.patch("/{account_id}", response_model=AccountResponseDTO)
def update_account(
    account_id: UUID,
    dto: AccountUpdateDTO,
    db: Session = Depends(get_db),
    service: AccountService = Depends(get_account_service),
):
    """Update details; setting is_active=false drops the account from type ledgers."""
    account = service.update(account_id, dto)
    db.commit()
    return account


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: UUID,
    db: Session = Depends(get_db),
    service: AccountService = Depends(get_account_service),
):
    """Refused while any voucher still references the account."""
    service.delete(account_id)
    db.commit()
