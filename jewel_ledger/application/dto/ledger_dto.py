"""
API DTOs - Data Transfer Objects for API requests/responses.
Amounts leave the service rounded to three places; signs are preserved.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from jewel_ledger.domain.value_objects import AccountType, PaymentMethod, VoucherKind


class AccountCreateDTO(BaseModel):
    """DTO - Create an account; account_no is assigned per type."""
    name: str = Field(..., min_length=1, max_length=200)
    account_type: AccountType
    phone: str | None = Field(None, max_length=50)
    cr_or_civil_id_no: str | None = Field(None, max_length=50, description="CR or civil ID")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "Al Noor Jewellers",
            "account_type": "Market",
            "phone": "+965 2222 3333",
            "cr_or_civil_id_no": "CR-10442",
        }
    })


class AccountUpdateDTO(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    is_active: bool | None = None
    phone: str | None = Field(None, max_length=50)
    cr_or_civil_id_no: str | None = Field(None, max_length=50)


class AccountResponseDTO(BaseModel):
    id: UUID
    account_no: int
    name: str
    account_type: AccountType
    is_active: bool
    phone: str | None
    cr_or_civil_id_no: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VoucherCreateDTO(BaseModel):
    """DTO - Create a voucher. Gold and KWD are unsigned; the kind sets direction."""
    account_id: UUID
    date: date
    kind: VoucherKind
    gold: Decimal = Field(Decimal("0"), ge=0, description="Gold weight")
    kwd: Decimal = Field(Decimal("0"), ge=0, description="Amount in KWD")
    mvn: str | None = Field(None, max_length=100, description="Market voucher number")
    description: str | None = Field(None, max_length=500)
    quantity: int | None = Field(None, ge=0)
    gold_rate: Decimal | None = Field(None, gt=0, description="Rate for GFV / gold fixing REC")
    fixing_amount: Decimal | None = Field(None, ge=0, description="KWD leg of a gold fixing")
    payment_method: PaymentMethod | None = None
    bank_name: str | None = None
    branch: str | None = None
    cheque_no: str | None = None
    cheque_date: date | None = None
    cheque_amount: Decimal | None = Field(None, ge=0)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "account_id": "00000000-0000-0000-0000-000000000001",
            "date": "2025-03-04",
            "kind": "REC",
            "gold": "12.500",
            "kwd": "0",
            "mvn": "MV-2211",
            "gold_rate": "24.150",
            "fixing_amount": "301.875",
            "payment_method": "cheque",
            "bank_name": "NBK",
            "branch": "Sharq",
            "cheque_no": "004512",
            "cheque_date": "2025-03-10",
            "cheque_amount": "301.875",
        }
    })


class VoucherBatchCreateDTO(BaseModel):
    vouchers: list[VoucherCreateDTO] = Field(..., min_length=1)


class ChequeCashDTO(BaseModel):
    cashed_date: date | None = Field(None, description="Defaults to today")


class VoucherResponseDTO(BaseModel):
    id: UUID
    account_id: UUID
    date: date
    kind: VoucherKind
    gold: Decimal
    kwd: Decimal
    mvn: str | None
    description: str | None
    quantity: int | None
    gold_rate: Decimal | None
    fixing_amount: Decimal | None
    payment_method: PaymentMethod | None
    bank_name: str | None = None
    branch: str | None = None
    cheque_no: str | None = None
    cheque_date: date | None = None
    cheque_amount: Decimal | None = None
    cashed_date: date | None
    created_at: datetime


class BalancePairDTO(BaseModel):
    gold: Decimal
    kwd: Decimal


class LedgerTotalsDTO(BaseModel):
    gold_debit: Decimal
    gold_credit: Decimal
    kwd_debit: Decimal
    kwd_credit: Decimal


class TradingRowDTO(BaseModel):
    voucher_id: UUID
    date: date
    kind: VoucherKind
    reference: str
    account_no: int | None = None
    account_name: str | None = None
    gold_change: Decimal
    kwd_change: Decimal
    gold_balance: Decimal
    kwd_balance: Decimal


class LockerRowDTO(BaseModel):
    voucher_id: UUID
    date: date
    kind: VoucherKind
    reference: str
    account_type: AccountType
    account_name: str
    payment_method: PaymentMethod | None
    locker_change: Decimal
    locker_balance: Decimal
    affects_locker: bool


class OpenBalanceRowDTO(BaseModel):
    voucher_id: UUID
    date: date
    kind: VoucherKind
    reference: str
    account_type: AccountType
    account_name: str
    gold_rate: Decimal | None
    gold_change: Decimal
    kwd_change: Decimal
    gold_balance: Decimal
    kwd_balance: Decimal


RowT = TypeVar("RowT")


class PageDTO(BaseModel, Generic[RowT]):
    """One printed page; synthetic rows are flags, balances live on the statement."""
    number: int
    rows: list[RowT]
    opening_row: bool
    closing_row: bool


class StatementWindowDTO(BaseModel):
    start_date: date | None
    end_date: date | None
    rows_per_page: int
    page_count: int
    transaction_count: int


class TradingStatementDTO(StatementWindowDTO):
    """Account or account-type ledger."""
    account: AccountResponseDTO | None = None
    account_type: AccountType
    gold_only: bool = False
    opening: BalancePairDTO
    closing: BalancePairDTO
    period: BalancePairDTO
    totals: LedgerTotalsDTO
    pages: list[PageDTO[TradingRowDTO]]


class LockerStatementDTO(StatementWindowDTO):
    opening_gold: Decimal
    closing_gold: Decimal
    gold_in: Decimal
    gold_out: Decimal
    net_change: Decimal
    pages: list[PageDTO[LockerRowDTO]]


class OpenBalanceStatementDTO(StatementWindowDTO):
    opening: BalancePairDTO
    closing: BalancePairDTO
    period: BalancePairDTO
    fixing_receipt_count: int
    gold_fixing_voucher_count: int
    pages: list[PageDTO[OpenBalanceRowDTO]]


class AccountBalanceDTO(BaseModel):
    account_id: UUID
    account_no: int
    name: str
    balance: BalancePairDTO
    transaction_count: int


class TypeBalancesDTO(BaseModel):
    """Closing trading balance of every active account of one type."""
    account_type: AccountType
    end_date: date | None
    gold_only: bool = False
    accounts: list[AccountBalanceDTO]
    total: BalancePairDTO
    transaction_count: int


class TypeTotalDTO(BaseModel):
    account_type: AccountType
    account_count: int
    transaction_count: int
    balance: BalancePairDTO


class TypeSummaryDTO(BaseModel):
    end_date: date | None
    types: list[TypeTotalDTO]
