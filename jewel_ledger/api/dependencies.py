"""
FastAPI dependencies wiring request-scoped sessions into the use cases.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from jewel_ledger.application.bookkeeping import AccountService, VoucherService
from jewel_ledger.application.statements import StatementService
from jewel_ledger.core.config import settings
from jewel_ledger.infrastructure.database import get_db
from jewel_ledger.infrastructure.repositories import SqlAccountRepository, SqlVoucherRepository


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    return AccountService(SqlAccountRepository(db), SqlVoucherRepository(db))


def get_voucher_service(db: Session = Depends(get_db)) -> VoucherService:
    return VoucherService(SqlAccountRepository(db), SqlVoucherRepository(db))


def get_statement_service(db: Session = Depends(get_db)) -> StatementService:
    return StatementService(
        SqlAccountRepository(db),
        SqlVoucherRepository(db),
        statement_rows_per_page=settings.statement_rows_per_page,
        locker_rows_per_page=settings.locker_rows_per_page,
    )
