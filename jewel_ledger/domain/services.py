"""
Domain Services - Business logic that operates on multiple entities.
Repository ports and the opening balance replay used to seed windowed reports.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from uuid import UUID

from .balances import BalanceAccumulator, LockerAccumulator, OpenBalanceAccumulator
from .entities import Account, Voucher
from .value_objects import ZERO, AccountType, BalancePair, PaymentMethod, VoucherKind


class IAccountRepository(ABC):

    @abstractmethod
    def get(self, account_id: UUID) -> Account | None:
        ...

    @abstractmethod
    def list_accounts(
        self,
        account_type: AccountType | None = None,
        active_only: bool = False,
    ) -> list[Account]:
        ...

    @abstractmethod
    def next_account_no(self, account_type: AccountType) -> int:
        ...

    @abstractmethod
    def add(self, account: Account) -> Account:
        ...

    @abstractmethod
    def update(self, account: Account) -> Account:
        ...

    @abstractmethod
    def delete(self, account_id: UUID) -> None:
        ...


class IVoucherRepository(ABC):

    @abstractmethod
    def get(self, voucher_id: UUID) -> Voucher | None:
        ...

    @abstractmethod
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
        """
        Vouchers ordered by (date, created_at).
        ``account_ids=None`` means every account; ``before`` is exclusive,
        ``start``/``end`` are inclusive.
        """
        ...

    @abstractmethod
    def count_for_account(self, account_id: UUID) -> int:
        ...

    @abstractmethod
    def add(self, voucher: Voucher) -> Voucher:
        ...

    @abstractmethod
    def update(self, voucher: Voucher) -> Voucher:
        ...

    @abstractmethod
    def delete(self, voucher_id: UUID) -> None:
        ...


class OpeningBalanceResolver:
    """
    Service - Balance as of the start of a report window.

    Replays every in-scope voucher dated strictly before ``start_date`` from
    zero. Without a start date the window is unbounded and the opening is
    zero. An empty scope also resolves to zero.
    """

    def __init__(
        self,
        account_repo: IAccountRepository,
        voucher_repo: IVoucherRepository,
        balances: BalanceAccumulator | None = None,
        locker: LockerAccumulator | None = None,
        open_balance: OpenBalanceAccumulator | None = None,
    ):
        self.account_repo = account_repo
        self.voucher_repo = voucher_repo
        self.balances = balances or BalanceAccumulator()
        self.locker = locker or LockerAccumulator()
        self.open_balance = open_balance or OpenBalanceAccumulator()

    def active_accounts(self, account_type: AccountType | None = None) -> list[Account]:
        return self.account_repo.list_accounts(account_type=account_type, active_only=True)

    def account_types(self, accounts: Iterable[Account]) -> dict[UUID, AccountType]:
        return {account.id: account.account_type for account in accounts}

    def trading_opening(self, account_ids: list[UUID], start_date: date | None) -> BalancePair:
        if start_date is None or not account_ids:
            return BalancePair.zero()
        history = self.voucher_repo.list_vouchers(account_ids, before=start_date)
        return self.balances.closing(history)

    def account_opening(self, account_id: UUID, start_date: date | None) -> BalancePair:
        return self.trading_opening([account_id], start_date)

    def type_opening(self, account_type: AccountType, start_date: date | None) -> BalancePair:
        accounts = self.active_accounts(account_type)
        return self.trading_opening([a.id for a in accounts], start_date)

    def locker_opening(self, start_date: date | None) -> Decimal:
        if start_date is None:
            return ZERO
        accounts = self.active_accounts()
        if not accounts:
            return ZERO
        history = self.voucher_repo.list_vouchers([a.id for a in accounts], before=start_date)
        return self.locker.fold(history, self.account_types(accounts)).closing

    def open_balance_opening(self, start_date: date | None) -> BalancePair:
        if start_date is None:
            return BalancePair.zero()
        # Inactive accounts still carry open fixings.
        accounts = self.account_repo.list_accounts()
        if not accounts:
            return BalancePair.zero()
        history = self.voucher_repo.list_vouchers(
            before=start_date, kinds=(VoucherKind.REC, VoucherKind.GFV)
        )
        return self.open_balance.fold(history, self.account_types(accounts)).closing
