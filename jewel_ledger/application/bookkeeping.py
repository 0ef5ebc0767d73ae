"""
Application - Account and voucher use cases.
Repositories flush; committing the unit of work is left to the caller.
"""

from datetime import date
from uuid import UUID

from jewel_ledger.application.dto.ledger_dto import (
    AccountCreateDTO,
    AccountResponseDTO,
    AccountUpdateDTO,
    VoucherCreateDTO,
    VoucherResponseDTO,
)
from jewel_ledger.core.logging_config import get_logger
from jewel_ledger.domain.entities import Account, Voucher
from jewel_ledger.domain.exceptions import (
    AccountInUseError,
    AccountNotFoundError,
    VoucherNotFoundError,
)
from jewel_ledger.domain.services import IAccountRepository, IVoucherRepository
from jewel_ledger.domain.value_objects import (
    AccountType,
    ChequeDetails,
    PaymentMethod,
    VoucherKind,
)

logger = get_logger("bookkeeping")


def voucher_response(voucher: Voucher) -> VoucherResponseDTO:
    cheque = voucher.cheque or ChequeDetails()
    return VoucherResponseDTO(
        id=voucher.id,
        account_id=voucher.account_id,
        date=voucher.date,
        kind=voucher.kind,
        gold=voucher.gold,
        kwd=voucher.kwd,
        mvn=voucher.mvn,
        description=voucher.description,
        quantity=voucher.quantity,
        gold_rate=voucher.gold_rate,
        fixing_amount=voucher.fixing_amount,
        payment_method=voucher.payment_method,
        bank_name=cheque.bank_name,
        branch=cheque.branch,
        cheque_no=cheque.cheque_no,
        cheque_date=cheque.cheque_date,
        cheque_amount=cheque.cheque_amount,
        cashed_date=voucher.cashed_date,
        created_at=voucher.created_at,
    )


def cheque_from_dto(dto: VoucherCreateDTO) -> ChequeDetails | None:
    cheque = ChequeDetails(
        bank_name=dto.bank_name,
        branch=dto.branch,
        cheque_no=dto.cheque_no,
        cheque_date=dto.cheque_date,
        cheque_amount=dto.cheque_amount,
    )
    return None if cheque.is_empty() else cheque


def voucher_from_dto(dto: VoucherCreateDTO, **overrides) -> Voucher:
    fields = dict(
        account_id=dto.account_id,
        date=dto.date,
        kind=dto.kind,
        gold=dto.gold,
        kwd=dto.kwd,
        mvn=dto.mvn,
        description=dto.description,
        quantity=dto.quantity,
        gold_rate=dto.gold_rate,
        fixing_amount=dto.fixing_amount,
        payment_method=dto.payment_method,
        cheque=cheque_from_dto(dto),
    )
    fields.update(overrides)
    return Voucher(**fields)


class AccountService:

    def __init__(self, account_repo: IAccountRepository, voucher_repo: IVoucherRepository):
        self.account_repo = account_repo
        self.voucher_repo = voucher_repo

    def get(self, account_id: UUID) -> Account:
        account = self.account_repo.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def create(self, dto: AccountCreateDTO) -> AccountResponseDTO:
        account = Account(
            account_no=self.account_repo.next_account_no(dto.account_type),
            name=dto.name.strip(),
            account_type=dto.account_type,
            phone=dto.phone,
            cr_or_civil_id_no=dto.cr_or_civil_id_no,
        )
        saved = self.account_repo.add(account)
        logger.info(
            "account_created",
            extra={"account_id": saved.id, "account_type": saved.account_type,
                   "account_no": saved.account_no},
        )
        return AccountResponseDTO.model_validate(saved)

    def list_accounts(
        self,
        account_type: AccountType | None = None,
        active_only: bool = False,
    ) -> list[AccountResponseDTO]:
        accounts = self.account_repo.list_accounts(account_type, active_only)
        return [AccountResponseDTO.model_validate(a) for a in accounts]

    def update(self, account_id: UUID, dto: AccountUpdateDTO) -> AccountResponseDTO:
        account = self.get(account_id)
        changes = dto.model_dump(exclude_unset=True)
        for key, value in changes.items():
            setattr(account, key, value)
        saved = self.account_repo.update(account)
        logger.info("account_updated", extra={"account_id": account_id, "fields": sorted(changes)})
        return AccountResponseDTO.model_validate(saved)

    def delete(self, account_id: UUID) -> None:
        self.get(account_id)
        in_use = self.voucher_repo.count_for_account(account_id)
        if in_use:
            raise AccountInUseError(account_id, in_use)
        self.account_repo.delete(account_id)
        logger.info("account_deleted", extra={"account_id": account_id})


class VoucherService:
    """Voucher writes and the cheque workflow."""

    def __init__(self, account_repo: IAccountRepository, voucher_repo: IVoucherRepository):
        self.account_repo = account_repo
        self.voucher_repo = voucher_repo

    def _owner(self, account_id: UUID) -> Account:
        account = self.account_repo.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def get(self, voucher_id: UUID) -> Voucher:
        voucher = self.voucher_repo.get(voucher_id)
        if voucher is None:
            raise VoucherNotFoundError(voucher_id)
        return voucher

    def create(self, dto: VoucherCreateDTO) -> VoucherResponseDTO:
        voucher = voucher_from_dto(dto)
        voucher.check_owner(self._owner(voucher.account_id))
        saved = self.voucher_repo.add(voucher)
        logger.info(
            "voucher_created",
            extra={"voucher_id": saved.id, "account_id": saved.account_id, "kind": saved.kind},
        )
        return voucher_response(saved)

    def create_batch(self, dtos: list[VoucherCreateDTO]) -> list[VoucherResponseDTO]:
        """All or nothing: the first invalid voucher aborts the batch."""
        vouchers = [voucher_from_dto(dto) for dto in dtos]
        owners: dict[UUID, Account] = {}
        for voucher in vouchers:
            if voucher.account_id not in owners:
                owners[voucher.account_id] = self._owner(voucher.account_id)
            voucher.check_owner(owners[voucher.account_id])
        saved = [self.voucher_repo.add(v) for v in vouchers]
        logger.info("voucher_batch_created", extra={"count": len(saved)})
        return [voucher_response(v) for v in saved]

    def update(self, voucher_id: UUID, dto: VoucherCreateDTO) -> VoucherResponseDTO:
        """
        Replace a voucher in place. Cheque particulars only survive on a cheque
        payment or on a receipt whose cheque was already cashed; a cashed
        receipt that is still paid in cash keeps its cashing date.
        """
        current = self.get(voucher_id)
        overrides = {"id": current.id, "created_at": current.created_at}
        if dto.payment_method is not PaymentMethod.CHEQUE:
            still_cashed = (
                current.cashed_date is not None
                and dto.kind is VoucherKind.REC
                and dto.payment_method is PaymentMethod.CASH
            )
            if still_cashed:
                overrides["cashed_date"] = current.cashed_date
                overrides["cheque"] = cheque_from_dto(dto) or current.cheque
            else:
                overrides["cheque"] = None
        voucher = voucher_from_dto(dto, **overrides)
        voucher.check_owner(self._owner(voucher.account_id))
        saved = self.voucher_repo.update(voucher)
        logger.info("voucher_updated", extra={"voucher_id": voucher_id})
        return voucher_response(saved)

    def delete(self, voucher_id: UUID) -> None:
        self.get(voucher_id)
        self.voucher_repo.delete(voucher_id)
        logger.info("voucher_deleted", extra={"voucher_id": voucher_id})

    def list_vouchers(
        self,
        account_id: UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        kind: VoucherKind | None = None,
    ) -> list[VoucherResponseDTO]:
        vouchers = self.voucher_repo.list_vouchers(
            [account_id] if account_id else None,
            start=start_date,
            end=end_date,
            kinds=(kind,) if kind else None,
        )
        return [voucher_response(v) for v in vouchers]

    def list_cheques(self, cashed: bool = False) -> list[VoucherResponseDTO]:
        """Market receipts paid by cheque, either still pending or already cashed."""
        market = self.account_repo.list_accounts(AccountType.MARKET)
        receipts = self.voucher_repo.list_vouchers(
            [a.id for a in market],
            kinds=(VoucherKind.REC,),
            payment_method=PaymentMethod.CASH if cashed else PaymentMethod.CHEQUE,
        )
        if cashed:
            receipts = [v for v in receipts if v.cashed_date is not None]
        return [voucher_response(v) for v in receipts]

    def mark_cashed(self, voucher_id: UUID, cashed_date: date | None = None) -> VoucherResponseDTO:
        voucher = self.get(voucher_id).mark_cashed(cashed_date or date.today())
        saved = self.voucher_repo.update(voucher)
        logger.info(
            "cheque_cashed",
            extra={"voucher_id": voucher_id, "cashed_date": saved.cashed_date},
        )
        return voucher_response(saved)
