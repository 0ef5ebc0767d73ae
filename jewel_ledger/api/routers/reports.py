"""
API Routers - Ledger statements and balance summaries.

Statements return signed values rounded to three places, already split into
pages; the renderer lays them out and never recomputes a balance.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from jewel_ledger.api.dependencies import get_statement_service
from jewel_ledger.application.dto.ledger_dto import (
    LockerStatementDTO,
    OpenBalanceStatementDTO,
    TradingStatementDTO,
    TypeBalancesDTO,
    TypeSummaryDTO,
)
from jewel_ledger.application.statements import StatementService
from jewel_ledger.domain.value_objects import AccountType

router = APIRouter(prefix="/api/v1/reports", tags=["Statements"])


@router.get("/accounts/{account_id}/statement", response_model=TradingStatementDTO)
def get_account_statement(
    account_id: UUID,
    start_date: date | None = Query(None, description="Opening balance is taken before this date"),
    end_date: date | None = Query(None, description="Inclusive"),
    service: StatementService = Depends(get_statement_service),
):
    """Trading ledger of one account."""
    return service.account_statement(account_id, start_date, end_date)


@router.get("/types/{account_type}/statement", response_model=TradingStatementDTO)
def get_type_statement(
    account_type: AccountType,
    start_date: date | None = None,
    end_date: date | None = None,
    service: StatementService = Depends(get_statement_service),
):
    """Trading ledger of all active accounts of a type. Project ledgers are gold only."""
    return service.type_statement(account_type, start_date, end_date)


@router.get("/types/{account_type}/balances", response_model=TypeBalancesDTO)
def get_type_balances(
    account_type: AccountType,
    end_date: date | None = Query(None, description="Balances as of this date"),
    service: StatementService = Depends(get_statement_service),
):
    return service.type_balances(account_type, end_date)


@router.get("/summary", response_model=TypeSummaryDTO)
def get_type_summary(
    end_date: date | None = None,
    service: StatementService = Depends(get_statement_service),
):
    """Closing trading balance per account type."""
    return service.type_summary(end_date)


@router.get("/locker", response_model=LockerStatementDTO)
def get_locker_statement(
    start_date: date | None = None,
    end_date: date | None = None,
    service: StatementService = Depends(get_statement_service),
):
    """
    Physical gold movement across active accounts.

    - GFV and Alloy vouchers are listed but never move the locker
    - Market receipts paid by an uncashed cheque are held back
    """
    return service.locker_statement(start_date, end_date)


@router.get("/open-balance", response_model=OpenBalanceStatementDTO)
def get_open_balance_statement(
    start_date: date | None = None,
    end_date: date | None = None,
    service: StatementService = Depends(get_statement_service),
):
    """Open gold fixing position across every account, active or not."""
    return service.open_balance_statement(start_date, end_date)
