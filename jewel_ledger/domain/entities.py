"""
Domain Entities - Core business entities following DDD.
Accounts, vouchers and the balance-annotated entries derived from them.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from decimal import Decimal

from .exceptions import ChequeStateError, InconsistentVoucherError
from .value_objects import (
    ZERO,
    AccountType,
    BalancePair,
    ChequeDetails,
    PaymentMethod,
    VoucherKind,
)


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Account:
    """
    Entity - Trading account.
    ``account_no`` is a dense sequence per account type, not globally unique.
    """
    account_no: int
    name: str
    account_type: AccountType
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    is_active: bool = True
    phone: str | None = None
    cr_or_civil_id_no: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def is_market(self) -> bool:
        return self.account_type is AccountType.MARKET


def _filled(text: str | None) -> bool:
    return bool(text and text.strip())


@dataclass(frozen=True)
class Voucher:
    """
    Entity - Voucher posted against exactly one account.

    Amounts are non-negative magnitudes; the sign comes from ``kind``.
    Kind-specific fields are validated on construction so that a voucher
    that exists is always safe to fold.
    """
    account_id: uuid.UUID
    date: date
    kind: VoucherKind
    gold: Decimal = ZERO
    kwd: Decimal = ZERO
    mvn: str | None = None
    description: str | None = None
    gold_rate: Decimal | None = None
    fixing_amount: Decimal | None = None
    payment_method: PaymentMethod | None = None
    cheque: ChequeDetails | None = None
    cashed_date: date | None = None
    quantity: int | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.gold < 0:
            raise InconsistentVoucherError("gold must be a non-negative magnitude", "gold")
        if self.kwd < 0:
            raise InconsistentVoucherError("kwd must be a non-negative magnitude", "kwd")

        has_mvn = _filled(self.mvn)
        has_description = _filled(self.description)
        if has_mvn == has_description:
            raise InconsistentVoucherError(
                "exactly one of mvn or description must be populated", "mvn"
            )

        if self.kind is VoucherKind.GFV and not (self.gold_rate and self.gold_rate > 0):
            raise InconsistentVoucherError(
                "gold_rate is required and must be greater than 0 for GFV vouchers",
                "gold_rate",
            )
        if self.gold_rate is not None and self.kind not in (VoucherKind.GFV, VoucherKind.REC):
            raise InconsistentVoucherError(
                f"gold_rate is not allowed on {self.kind.value} vouchers", "gold_rate"
            )
        if self.gold_rate is not None and self.gold_rate <= 0:
            raise InconsistentVoucherError("gold_rate must be greater than 0", "gold_rate")

        if self.fixing_amount is not None:
            if self.kind is not VoucherKind.REC:
                raise InconsistentVoucherError(
                    "fixing_amount is only allowed on REC vouchers", "fixing_amount"
                )
            if self.fixing_amount < 0:
                raise InconsistentVoucherError(
                    "fixing_amount must be a non-negative magnitude", "fixing_amount"
                )
            if self.gold_rate is None:
                raise InconsistentVoucherError(
                    "gold_rate is required when gold fixing is enabled", "gold_rate"
                )

        if self.cheque is not None and not self.cheque.is_empty():
            # A cashed cheque keeps its particulars.
            if self.payment_method is not PaymentMethod.CHEQUE and self.cashed_date is None:
                raise InconsistentVoucherError(
                    "cheque details require payment_method 'cheque'", "payment_method"
                )
        if self.payment_method is PaymentMethod.CHEQUE and self.is_gold_fixing:
            if self.cheque is None or not self.cheque.is_complete():
                raise InconsistentVoucherError(
                    "all cheque details are required when a gold fixing is paid by cheque",
                    "cheque",
                )
        if self.cashed_date is not None and self.payment_method is not PaymentMethod.CASH:
            raise InconsistentVoucherError(
                "cashed_date is only set once a cheque has been cashed", "cashed_date"
            )

    @property
    def is_gold_fixing(self) -> bool:
        """REC priced with a gold rate (a fixing receipt)."""
        return self.kind is VoucherKind.REC and self.gold_rate is not None

    @property
    def is_pending_cheque(self) -> bool:
        return self.payment_method is PaymentMethod.CHEQUE

    @property
    def reference(self) -> str:
        return (self.mvn or self.description or "").strip()

    def check_owner(self, account: Account) -> None:
        """Market vouchers carry an MVN, all other types a description."""
        if account.id != self.account_id:
            raise InconsistentVoucherError("voucher does not belong to this account", "account_id")
        if account.is_market and not _filled(self.mvn):
            raise InconsistentVoucherError("MVN is required for Market accounts", "mvn")
        if not account.is_market and not _filled(self.description):
            raise InconsistentVoucherError(
                "Description is required for non-Market accounts", "description"
            )

    def mark_cashed(self, cashed_date: date) -> "Voucher":
        if self.kind is not VoucherKind.REC or not self.is_pending_cheque:
            raise ChequeStateError(self.id, "only a REC paid by an uncashed cheque can be cashed")
        return replace(self, payment_method=PaymentMethod.CASH, cashed_date=cashed_date)


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """A voucher with its signed movement and the balance after applying it."""
    voucher: Voucher
    gold_change: Decimal
    kwd_change: Decimal
    balance: BalancePair

    @property
    def gold_balance(self) -> Decimal:
        return self.balance.gold

    @property
    def kwd_balance(self) -> Decimal:
        return self.balance.kwd


@dataclass(frozen=True, slots=True)
class LedgerTotals:
    gold_debit: Decimal
    gold_credit: Decimal
    kwd_debit: Decimal
    kwd_credit: Decimal


@dataclass(frozen=True)
class LedgerRun:
    """Result of folding a voucher sequence from an opening balance."""
    opening: BalancePair
    entries: tuple[LedgerEntry, ...] = ()

    @property
    def closing(self) -> BalancePair:
        return self.entries[-1].balance if self.entries else self.opening

    @property
    def period(self) -> BalancePair:
        return self.closing - self.opening

    def totals(self) -> LedgerTotals:
        gold_debit = gold_credit = kwd_debit = kwd_credit = ZERO
        for entry in self.entries:
            if entry.gold_change > 0:
                gold_debit += entry.gold_change
            else:
                gold_credit -= entry.gold_change
            if entry.kwd_change > 0:
                kwd_debit += entry.kwd_change
            else:
                kwd_credit -= entry.kwd_change
        return LedgerTotals(gold_debit, gold_credit, kwd_debit, kwd_credit)


@dataclass(frozen=True)
class OpenBalanceRun(LedgerRun):
    fixing_receipt_count: int = 0
    gold_fixing_voucher_count: int = 0

    @property
    def transaction_count(self) -> int:
        return self.fixing_receipt_count + self.gold_fixing_voucher_count


@dataclass(frozen=True, slots=True)
class LockerEntry:
    voucher: Voucher
    account_type: AccountType
    change: Decimal
    balance: Decimal

    @property
    def affects_locker(self) -> bool:
        return self.change != 0


@dataclass(frozen=True)
class LockerRun:
    opening: Decimal
    entries: tuple[LockerEntry, ...] = ()

    @property
    def closing(self) -> Decimal:
        return self.entries[-1].balance if self.entries else self.opening

    @property
    def gold_out(self) -> Decimal:
        return sum((-e.change for e in self.entries if e.change < 0), ZERO)

    @property
    def gold_in(self) -> Decimal:
        return sum((e.change for e in self.entries if e.change > 0), ZERO)

    @property
    def net_change(self) -> Decimal:
        return self.closing - self.opening
