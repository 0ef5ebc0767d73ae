"""
Integration tests - SQL repositories against an in-memory SQLite store.
"""

from datetime import UTC, date

from jewel_ledger.domain.entities import Voucher
from jewel_ledger.domain.value_objects import VoucherKind
from jewel_ledger.infrastructure.repositories import SqlAccountRepository, SqlVoucherRepository


class TestTimestamps:

    def test_timestamps_come_back_in_utc(self, db_session_factory, market_account):
        with db_session_factory() as db:
            SqlAccountRepository(db).add(market_account)
            voucher = SqlVoucherRepository(db).add(Voucher(
                account_id=market_account.id, date=date(2025, 1, 2),
                kind=VoucherKind.INV, mvn="MV-1",
            ))
            db.commit()

        with db_session_factory() as db:
            account = SqlAccountRepository(db).get(market_account.id)
            stored = SqlVoucherRepository(db).get(voucher.id)

        assert account.created_at.tzinfo is not None
        assert account.updated_at.tzinfo is not None
        assert stored.created_at.tzinfo is not None
        assert stored.created_at == voucher.created_at
        assert stored.created_at.tzinfo is UTC

    def test_same_day_vouchers_keep_creation_order(
        self, db_session_factory, market_account, make_voucher,
    ):
        first = make_voucher(market_account, VoucherKind.INV, gold="1", mvn="MV-1")
        second = make_voucher(market_account, VoucherKind.REC, gold="1", mvn="MV-2")
        with db_session_factory() as db:
            SqlAccountRepository(db).add(market_account)
            repo = SqlVoucherRepository(db)
            repo.add(second)
            repo.add(first)
            db.commit()

        with db_session_factory() as db:
            listed = SqlVoucherRepository(db).list_vouchers([market_account.id])

        assert [v.id for v in listed] == [first.id, second.id]
