"""
Infrastructure - SQL repositories behind the domain repository ports.
Rows are mapped to domain entities on the way out so that every voucher
handed to the accumulators has passed construction-time validation.
"""

from collections.abc import Iterable
from datetime import UTC, date, datetime
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from jewel_ledger.domain.entities import Account, Voucher, utc_now
from jewel_ledger.domain.exceptions import AccountNotFoundError, VoucherNotFoundError
from jewel_ledger.domain.services import IAccountRepository, IVoucherRepository
from jewel_ledger.domain.value_objects import (
    AccountType,
    ChequeDetails,
    PaymentMethod,
    VoucherKind,
)
from jewel_ledger.infrastructure.database.models import Account as AccountModel
from jewel_ledger.infrastructure.database.models import Voucher as VoucherModel


def as_utc(value: datetime) -> datetime:
    """SQLite hands timestamps back without a zone; they are stored as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def account_to_domain(row: AccountModel) -> Account:
    return Account(
        id=row.id,
        account_no=row.account_no,
        name=row.name,
        account_type=AccountType(row.account_type),
        is_active=row.is_active,
        phone=row.phone,
        cr_or_civil_id_no=row.cr_or_civil_id_no,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def voucher_to_domain(row: VoucherModel) -> Voucher:
    cheque = ChequeDetails(
        bank_name=row.bank_name,
        branch=row.branch,
        cheque_no=row.cheque_no,
        cheque_date=row.cheque_date,
        cheque_amount=row.cheque_amount,
    )
    return Voucher(
        id=row.id,
        account_id=row.account_id,
        date=row.voucher_date,
        kind=VoucherKind(row.kind),
        gold=row.gold,
        kwd=row.kwd,
        mvn=row.mvn,
        description=row.description,
        gold_rate=row.gold_rate,
        fixing_amount=row.fixing_amount,
        payment_method=PaymentMethod(row.payment_method) if row.payment_method else None,
        cheque=None if cheque.is_empty() else cheque,
        cashed_date=row.cashed_date,
        quantity=row.quantity,
        created_at=as_utc(row.created_at),
    )


def _apply_voucher(row: VoucherModel, voucher: Voucher) -> None:
    cheque = voucher.cheque or ChequeDetails()
    row.account_id = voucher.account_id
    row.voucher_date = voucher.date
    row.kind = voucher.kind.value
    row.gold = voucher.gold
    row.kwd = voucher.kwd
    row.mvn = voucher.mvn
    row.description = voucher.description
    row.quantity = voucher.quantity
    row.gold_rate = voucher.gold_rate
    row.fixing_amount = voucher.fixing_amount
    row.payment_method = voucher.payment_method.value if voucher.payment_method else None
    row.bank_name = cheque.bank_name
    row.branch = cheque.branch
    row.cheque_no = cheque.cheque_no
    row.cheque_date = cheque.cheque_date
    row.cheque_amount = cheque.cheque_amount
    row.cashed_date = voucher.cashed_date


class SqlAccountRepository(IAccountRepository):
    """Account store. Writes are flushed, the caller owns the commit."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, account_id: UUID) -> AccountModel:
        row = self.db.query(AccountModel).filter(AccountModel.id == account_id).first()
        if row is None:
            raise AccountNotFoundError(account_id)
        return row

    def get(self, account_id: UUID) -> Account | None:
        row = self.db.query(AccountModel).filter(AccountModel.id == account_id).first()
        return account_to_domain(row) if row else None

    def list_accounts(
        self,
        account_type: AccountType | None = None,
        active_only: bool = False,
    ) -> list[Account]:
        query = self.db.query(AccountModel)
        if account_type is not None:
            query = query.filter(AccountModel.account_type == account_type.value)
        if active_only:
            query = query.filter(AccountModel.is_active.is_(True))
        rows = query.order_by(AccountModel.account_type, AccountModel.account_no).all()
        return [account_to_domain(r) for r in rows]

    def next_account_no(self, account_type: AccountType) -> int:
        current = self.db.query(func.max(AccountModel.account_no)).filter(
            AccountModel.account_type == account_type.value
        ).scalar()
        return (current or 0) + 1

    def add(self, account: Account) -> Account:
        row = AccountModel(
            id=account.id,
            account_no=account.account_no,
            name=account.name,
            account_type=account.account_type.value,
            is_active=account.is_active,
            phone=account.phone,
            cr_or_civil_id_no=account.cr_or_civil_id_no,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        self.db.add(row)
        self.db.flush()
        return account_to_domain(row)

    def update(self, account: Account) -> Account:
        row = self._row(account.id)
        row.name = account.name
        row.is_active = account.is_active
        row.phone = account.phone
        row.cr_or_civil_id_no = account.cr_or_civil_id_no
        row.updated_at = utc_now()
        self.db.flush()
        return account_to_domain(row)

    def delete(self, account_id: UUID) -> None:
        self.db.delete(self._row(account_id))
        self.db.flush()


class SqlVoucherRepository(IVoucherRepository):
    """Voucher store ordered by (voucher_date, created_at)."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, voucher_id: UUID) -> VoucherModel:
        row = self.db.query(VoucherModel).filter(VoucherModel.id == voucher_id).first()
        if row is None:
            raise VoucherNotFoundError(voucher_id)
        return row

    def get(self, voucher_id: UUID) -> Voucher | None:
        row = self.db.query(VoucherModel).filter(VoucherModel.id == voucher_id).first()
        return voucher_to_domain(row) if row else None

    def list_vouchers(
        self,
        account_ids: Iterable[UUID] | None = None,
        *,
        before: date | None = None,
        start: date | None = None,
        end: date | None = None,
        kinds: Iterable[VoucherKind] | None = None,
        payment_method: PaymentMethod | None = None,
    ) -> list[Voucher]:
        query = self.db.query(VoucherModel)
        if account_ids is not None:
            ids = list(account_ids)
            if not ids:
                return []
            query = query.filter(VoucherModel.account_id.in_(ids))
        if before is not None:
            query = query.filter(VoucherModel.voucher_date < before)
        if start is not None:
            query = query.filter(VoucherModel.voucher_date >= start)
        if end is not None:
            query = query.filter(VoucherModel.voucher_date <= end)
        if kinds is not None:
            query = query.filter(VoucherModel.kind.in_([k.value for k in kinds]))
        if payment_method is not None:
            query = query.filter(VoucherModel.payment_method == payment_method.value)

        rows = query.order_by(VoucherModel.voucher_date, VoucherModel.created_at).all()
        return [voucher_to_domain(r) for r in rows]

    def count_for_account(self, account_id: UUID) -> int:
        return self.db.query(VoucherModel).filter(VoucherModel.account_id == account_id).count()

    def add(self, voucher: Voucher) -> Voucher:
        row = VoucherModel(id=voucher.id, created_at=voucher.created_at)
        _apply_voucher(row, voucher)
        self.db.add(row)
        self.db.flush()
        return voucher_to_domain(row)

    def update(self, voucher: Voucher) -> Voucher:
        row = self._row(voucher.id)
        _apply_voucher(row, voucher)
        row.updated_at = utc_now()
        self.db.flush()
        return voucher_to_domain(row)

    def delete(self, voucher_id: UUID) -> None:
        self.db.delete(self._row(voucher_id))
        self.db.flush()
