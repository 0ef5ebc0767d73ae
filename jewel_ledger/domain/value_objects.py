"""
Domain Layer - Pure Python business logic following DDD.
Value objects for the gold / KWD bookkeeping of the trading house.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

ZERO = Decimal("0")
THREE_PLACES = Decimal("0.001")


class AccountType(str, Enum):
    """Fixed set of account groups used by the ledgers."""
    MARKET = "Market"            # Customers buying/selling over the counter
    CASTING = "Casting"          # Casting workshops
    FACETING = "Faceting"        # Faceting workshops
    PROJECT = "Project"          # Project accounts (gold only)
    GOLD_FIXING = "Gold Fixing"  # Gold fixing counterparties


# Workshop-style accounts: every INV/REC moves physical stock.
WORKSHOP_TYPES = frozenset({AccountType.CASTING, AccountType.FACETING, AccountType.PROJECT})


class VoucherKind(str, Enum):
    """Voucher kinds; direction is derived from the kind, never stored."""
    INV = "INV"      # Invoice (debit)
    REC = "REC"      # Receipt (credit)
    GFV = "GFV"      # Gold fixing voucher
    ALLOY = "Alloy"  # Alloy transaction, trades like INV


class PaymentMethod(str, Enum):
    CASH = "cash"
    CHEQUE = "cheque"


def quantize(value: Decimal) -> Decimal:
    """Round to the 3-decimal display convention; never used inside a fold."""
    rounded = value.quantize(THREE_PLACES)
    return rounded if rounded else abs(rounded)


@dataclass(frozen=True, slots=True)
class BalancePair:
    """Value Object - gold and KWD balance carried side by side."""
    gold: Decimal
    kwd: Decimal

    @classmethod
    def zero(cls) -> "BalancePair":
        return cls(gold=ZERO, kwd=ZERO)

    def __add__(self, other: "BalancePair") -> "BalancePair":
        return BalancePair(gold=self.gold + other.gold, kwd=self.kwd + other.kwd)

    def __sub__(self, other: "BalancePair") -> "BalancePair":
        return BalancePair(gold=self.gold - other.gold, kwd=self.kwd - other.kwd)

    def quantized(self) -> "BalancePair":
        return BalancePair(gold=quantize(self.gold), kwd=quantize(self.kwd))


@dataclass(frozen=True, slots=True)
class ChequeDetails:
    """Cheque particulars attached to a gold fixing receipt paid by cheque."""
    bank_name: str | None = None
    branch: str | None = None
    cheque_no: str | None = None
    cheque_date: date | None = None
    cheque_amount: Decimal | None = None

    def is_complete(self) -> bool:
        return bool(
            (self.bank_name or "").strip()
            and (self.branch or "").strip()
            and (self.cheque_no or "").strip()
            and self.cheque_date
        )

    def is_empty(self) -> bool:
        return not any((
            self.bank_name, self.branch, self.cheque_no,
            self.cheque_date, self.cheque_amount,
        ))
