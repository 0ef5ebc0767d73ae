"""
Infrastructure - SQLModel database models.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from jewel_ledger.domain.entities import utc_now


class Account(SQLModel, table=True):
    """Trading account; account_no is a sequence within its type."""

    __table_args__ = (UniqueConstraint("account_type", "account_no", name="uq_account_type_no"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_no: int
    name: str
    account_type: str = Field(index=True)
    is_active: bool = True
    phone: str | None = None
    cr_or_civil_id_no: str | None = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    vouchers: list["Voucher"] = Relationship(back_populates="account")


class Voucher(SQLModel, table=True):
    """Voucher posted against one account. Amounts are unsigned."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_id: UUID = Field(foreign_key="account.id", index=True)
    voucher_date: date = Field(index=True)
    kind: str = Field(index=True)  # INV, REC, GFV, Alloy
    mvn: str | None = None
    description: str | None = None
    quantity: int | None = None
    gold: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=3)
    kwd: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=3)
    gold_rate: Decimal | None = Field(default=None, max_digits=18, decimal_places=3)
    fixing_amount: Decimal | None = Field(default=None, max_digits=18, decimal_places=3)
    payment_method: str | None = Field(default=None, index=True)  # cash, cheque
    bank_name: str | None = None
    branch: str | None = None
    cheque_no: str | None = None
    cheque_date: date | None = None
    cheque_amount: Decimal | None = Field(default=None, max_digits=18, decimal_places=3)
    cashed_date: date | None = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    account: Account = Relationship(back_populates="vouchers")
