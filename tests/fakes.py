"""
In-memory repositories for domain and application tests.
"""

from collections.abc import Iterable
from uuid import UUID

from jewel_ledger.domain.entities import Account, Voucher
from jewel_ledger.domain.services import IAccountRepository, IVoucherRepository
from jewel_ledger.domain.value_objects import AccountType


class InMemoryAccountRepository(IAccountRepository):

    def __init__(self, accounts: Iterable[Account] = ()):
        self.accounts = {a.id: a for a in accounts}

    def get(self, account_id: UUID) -> Account | None:
        return self.accounts.get(account_id)

    def list_accounts(self, account_type=None, active_only=False) -> list[Account]:
        return [
            a for a in self.accounts.values()
            if (account_type is None or a.account_type is account_type)
            and (a.is_active or not active_only)
        ]

    def next_account_no(self, account_type: AccountType) -> int:
        numbers = [a.account_no for a in self.accounts.values() if a.account_type is account_type]
        return max(numbers, default=0) + 1

    def add(self, account: Account) -> Account:
        self.accounts[account.id] = account
        return account

    def update(self, account: Account) -> Account:
        self.accounts[account.id] = account
        return account

    def delete(self, account_id: UUID) -> None:
        del self.accounts[account_id]


class InMemoryVoucherRepository(IVoucherRepository):

    def __init__(self, vouchers: Iterable[Voucher] = ()):
        self.vouchers = {v.id: v for v in vouchers}
        self.calls = 0

    def get(self, voucher_id: UUID) -> Voucher | None:
        return self.vouchers.get(voucher_id)

    def list_vouchers(
        self,
        account_ids=None,
        *,
        before=None,
        start=None,
        end=None,
        kinds=None,
        payment_method=None,
    ) -> list[Voucher]:
        self.calls += 1
        ids = None if account_ids is None else set(account_ids)
        kind_set = None if kinds is None else set(kinds)
        selected = [
            v for v in self.vouchers.values()
            if (ids is None or v.account_id in ids)
            and (before is None or v.date < before)
            and (start is None or v.date >= start)
            and (end is None or v.date <= end)
            and (kind_set is None or v.kind in kind_set)
            and (payment_method is None or v.payment_method is payment_method)
        ]
        return sorted(selected, key=lambda v: (v.date, v.created_at))

    def count_for_account(self, account_id: UUID) -> int:
        return sum(1 for v in self.vouchers.values() if v.account_id == account_id)

    def add(self, voucher: Voucher) -> Voucher:
        self.vouchers[voucher.id] = voucher
        return voucher

    def update(self, voucher: Voucher) -> Voucher:
        self.vouchers[voucher.id] = voucher
        return voucher

    def delete(self, voucher_id: UUID) -> None:
        del self.vouchers[voucher_id]
