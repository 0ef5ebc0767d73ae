"""
Pytest configuration and fixtures.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import UTC, date, datetime, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402
from itertools import count  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from jewel_ledger.domain.entities import Account, Voucher  # noqa: E402
from jewel_ledger.domain.value_objects import (  # noqa: E402
    AccountType,
    PaymentMethod,
    VoucherKind,
)
from jewel_ledger.infrastructure.database import get_db  # noqa: E402
from jewel_ledger.main import app  # noqa: E402

_BASE_TIME = datetime(2025, 1, 1, 9, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_account():
    numbers = count(1)

    def _make(account_type: AccountType = AccountType.MARKET, **kwargs) -> Account:
        kwargs.setdefault("account_no", next(numbers))
        kwargs.setdefault("name", f"{account_type.value} account")
        return Account(account_type=account_type, **kwargs)

    return _make


@pytest.fixture
def make_voucher():
    """Voucher factory; creation timestamps increase with every call."""
    ticks = count()

    def _make(
        account: Account,
        kind: VoucherKind,
        gold: str | Decimal = "0",
        kwd: str | Decimal = "0",
        on: date = date(2025, 1, 15),
        **kwargs,
    ) -> Voucher:
        if account.account_type is AccountType.MARKET:
            kwargs.setdefault("mvn", "MV-1")
        else:
            kwargs.setdefault("description", "workshop transfer")
        if kind is VoucherKind.GFV:
            kwargs.setdefault("gold_rate", Decimal("20"))
        kwargs.setdefault("created_at", _BASE_TIME + timedelta(seconds=next(ticks)))
        return Voucher(
            account_id=account.id,
            date=on,
            kind=kind,
            gold=Decimal(gold),
            kwd=Decimal(kwd),
            **kwargs,
        )

    return _make


@pytest.fixture
def market_account(make_account) -> Account:
    return make_account(AccountType.MARKET, name="Al Noor Jewellers")


@pytest.fixture
def casting_account(make_account) -> Account:
    return make_account(AccountType.CASTING, name="Casting Workshop")


@pytest.fixture
def gold_fixing_account(make_account) -> Account:
    return make_account(AccountType.GOLD_FIXING, name="Bullion Desk")


@pytest.fixture
def cheque_receipt(make_voucher, market_account) -> Voucher:
    return make_voucher(
        market_account, VoucherKind.REC, gold="2.000", kwd="40.000",
        payment_method=PaymentMethod.CHEQUE,
    )


@pytest.fixture
def db_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    SQLModel.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session_factory) -> TestClient:
    def _get_db():
        db = db_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
