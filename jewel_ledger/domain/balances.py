"""
Balance accumulators - the three independent folds over a voucher stream.

* BalanceAccumulator      trading balance (gold / KWD) per account or type
* LockerAccumulator       physical gold stock held in the locker
* OpenBalanceAccumulator  open gold fixing position across every account

Each fold is a strict left-to-right pass over vouchers sorted by
(date, created_at). Arithmetic stays at full Decimal precision; rounding to
three places happens only when a result is presented.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from uuid import UUID

from .entities import (
    LedgerEntry,
    LedgerRun,
    LockerEntry,
    LockerRun,
    OpenBalanceRun,
    Voucher,
)
from .exceptions import AccountNotFoundError
from .value_objects import (
    WORKSHOP_TYPES,
    ZERO,
    AccountType,
    BalancePair,
    PaymentMethod,
    VoucherKind,
)

# (gold sign, kwd sign) per voucher kind for the trading balance.
TRADING_SIGNS: dict[VoucherKind, tuple[int, int]] = {
    VoucherKind.INV: (1, 1),
    VoucherKind.ALLOY: (1, 1),
    VoucherKind.REC: (-1, -1),
    VoucherKind.GFV: (1, -1),
}

LOCKER_EXCLUDED_KINDS = frozenset({VoucherKind.GFV, VoucherKind.ALLOY})


def chronological(vouchers: Iterable[Voucher]) -> list[Voucher]:
    """Stable ascending sort; same-date vouchers keep creation order."""
    return sorted(vouchers, key=lambda v: (v.date, v.created_at))


def _owner_type(voucher: Voucher, account_types: Mapping[UUID, AccountType]) -> AccountType:
    try:
        return account_types[voucher.account_id]
    except KeyError:
        raise AccountNotFoundError(voucher.account_id) from None


class BalanceAccumulator:
    """
    Service - Trading balance fold.

    INV and Alloy add gold and KWD, REC subtracts both, GFV adds gold and
    subtracts KWD. The rule does not depend on the account type.
    """

    def change_for(self, voucher: Voucher) -> BalancePair:
        gold_sign, kwd_sign = TRADING_SIGNS[voucher.kind]
        return BalancePair(gold=gold_sign * voucher.gold, kwd=kwd_sign * voucher.kwd)

    def fold(self, vouchers: Iterable[Voucher], opening: BalancePair | None = None) -> LedgerRun:
        start = opening if opening is not None else BalancePair.zero()
        balance = start
        entries: list[LedgerEntry] = []
        for voucher in chronological(vouchers):
            change = self.change_for(voucher)
            balance = balance + change
            entries.append(LedgerEntry(
                voucher=voucher,
                gold_change=change.gold,
                kwd_change=change.kwd,
                balance=balance,
            ))
        return LedgerRun(opening=start, entries=tuple(entries))

    def closing(self, vouchers: Iterable[Voucher], opening: BalancePair | None = None) -> BalancePair:
        return self.fold(vouchers, opening).closing


class LockerAccumulator:
    """
    Service - Locker gold fold.

    Tracks physical stock. GFV and Alloy never move it. A Market receipt
    paid by cheque is deferred until the cheque is cashed, and the rule
    reads the voucher's current payment method.
    """

    def change_for(self, voucher: Voucher, account_type: AccountType) -> Decimal:
        if voucher.kind in LOCKER_EXCLUDED_KINDS:
            return ZERO

        if account_type is AccountType.MARKET:
            if voucher.kind is VoucherKind.INV:
                return -voucher.gold
            if voucher.payment_method is not PaymentMethod.CHEQUE:
                return voucher.gold
            return ZERO

        if account_type in WORKSHOP_TYPES:
            return -voucher.gold if voucher.kind is VoucherKind.INV else voucher.gold

        if account_type is AccountType.GOLD_FIXING and voucher.kind is VoucherKind.REC:
            return voucher.gold

        return ZERO

    def fold(
        self,
        vouchers: Iterable[Voucher],
        account_types: Mapping[UUID, AccountType],
        opening: Decimal = ZERO,
    ) -> LockerRun:
        balance = opening
        entries: list[LockerEntry] = []
        for voucher in chronological(vouchers):
            account_type = _owner_type(voucher, account_types)
            change = self.change_for(voucher, account_type)
            balance += change
            entries.append(LockerEntry(
                voucher=voucher,
                account_type=account_type,
                change=change,
                balance=balance,
            ))
        return LockerRun(opening=opening, entries=tuple(entries))


class OpenBalanceAccumulator:
    """
    Service - Open balance fold across all accounts, active or not.

    Only two patterns count: a Market REC priced with a gold rate adds its
    gold and fixing amount, and a GFV on any account removes its gold and
    KWD. Every other voucher is skipped and does not appear in the run.
    """

    def change_for(self, voucher: Voucher, account_type: AccountType) -> BalancePair | None:
        if voucher.is_gold_fixing and account_type is AccountType.MARKET:
            return BalancePair(gold=voucher.gold, kwd=voucher.fixing_amount or ZERO)
        if voucher.kind is VoucherKind.GFV:
            return BalancePair(gold=-voucher.gold, kwd=-voucher.kwd)
        return None

    def fold(
        self,
        vouchers: Iterable[Voucher],
        account_types: Mapping[UUID, AccountType],
        opening: BalancePair | None = None,
    ) -> OpenBalanceRun:
        start = opening if opening is not None else BalancePair.zero()
        balance = start
        entries: list[LedgerEntry] = []
        fixing_receipts = gold_fixing_vouchers = 0
        for voucher in chronological(vouchers):
            change = self.change_for(voucher, _owner_type(voucher, account_types))
            if change is None:
                continue
            if voucher.kind is VoucherKind.GFV:
                gold_fixing_vouchers += 1
            else:
                fixing_receipts += 1
            balance = balance + change
            entries.append(LedgerEntry(
                voucher=voucher,
                gold_change=change.gold,
                kwd_change=change.kwd,
                balance=balance,
            ))
        return OpenBalanceRun(
            opening=start,
            entries=tuple(entries),
            fixing_receipt_count=fixing_receipts,
            gold_fixing_voucher_count=gold_fixing_vouchers,
        )
