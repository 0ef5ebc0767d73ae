"""
Unit tests - Locker (physical gold stock) fold.
"""

from datetime import date
from decimal import Decimal

import pytest

from jewel_ledger.domain.balances import BalanceAccumulator, LockerAccumulator
from jewel_ledger.domain.exceptions import AccountNotFoundError
from jewel_ledger.domain.value_objects import AccountType, PaymentMethod, VoucherKind

ZERO = Decimal("0")


@pytest.fixture
def locker() -> LockerAccumulator:
    return LockerAccumulator()


class TestLockerRules:

    @pytest.mark.parametrize("account_type", list(AccountType))
    @pytest.mark.parametrize("payment_method", [None, PaymentMethod.CASH, PaymentMethod.CHEQUE])
    def test_gfv_and_alloy_never_move_the_locker(self, locker, make_account, make_voucher,
                                                 account_type, payment_method):
        account = make_account(account_type)
        gfv = make_voucher(account, VoucherKind.GFV, gold="4", kwd="80",
                           payment_method=payment_method)
        alloy = make_voucher(account, VoucherKind.ALLOY, gold="4", kwd="80",
                             payment_method=payment_method)
        assert locker.change_for(gfv, account_type) == ZERO
        assert locker.change_for(alloy, account_type) == ZERO

    def test_market_invoice_takes_gold_out(self, locker, make_voucher, market_account):
        inv = make_voucher(market_account, VoucherKind.INV, gold="3.250")
        assert locker.change_for(inv, AccountType.MARKET) == Decimal("-3.250")

    def test_market_cash_receipt_adds_gold(self, locker, make_voucher, market_account):
        rec = make_voucher(market_account, VoucherKind.REC, gold="2.000",
                           payment_method=PaymentMethod.CASH)
        assert locker.change_for(rec, AccountType.MARKET) == Decimal("2.000")

    def test_market_receipt_without_payment_method_adds_gold(self, locker, make_voucher,
                                                            market_account):
        rec = make_voucher(market_account, VoucherKind.REC, gold="2.000")
        assert locker.change_for(rec, AccountType.MARKET) == Decimal("2.000")

    def test_market_cheque_receipt_is_deferred(self, locker, cheque_receipt):
        assert locker.change_for(cheque_receipt, AccountType.MARKET) == ZERO

    @pytest.mark.parametrize("account_type", [
        AccountType.CASTING, AccountType.FACETING, AccountType.PROJECT,
    ])
    def test_workshop_movements(self, locker, make_account, make_voucher, account_type):
        account = make_account(account_type)
        inv = make_voucher(account, VoucherKind.INV, gold="1.5")
        rec = make_voucher(account, VoucherKind.REC, gold="1.25", payment_method=PaymentMethod.CHEQUE)
        assert locker.change_for(inv, account_type) == Decimal("-1.5")
        assert locker.change_for(rec, account_type) == Decimal("1.25")

    def test_gold_fixing_receipt_only(self, locker, make_voucher, gold_fixing_account):
        rec = make_voucher(gold_fixing_account, VoucherKind.REC, gold="6")
        inv = make_voucher(gold_fixing_account, VoucherKind.INV, gold="6")
        assert locker.change_for(rec, AccountType.GOLD_FIXING) == Decimal("6")
        assert locker.change_for(inv, AccountType.GOLD_FIXING) == ZERO


class TestChequeScenario:
    """A cheque receipt moves the trading balance but not the locker."""

    def test_cheque_against_cash_receipt(self, locker, make_voucher, market_account, cheque_receipt):
        types = {market_account.id: AccountType.MARKET}
        trading = BalanceAccumulator().fold([cheque_receipt])
        assert trading.closing.gold == Decimal("-2.000")
        assert locker.fold([cheque_receipt], types).closing == ZERO

        cash = make_voucher(market_account, VoucherKind.REC, gold="2.000", kwd="40.000",
                            payment_method=PaymentMethod.CASH)
        assert locker.fold([cash], types).closing == Decimal("2.000")

    def test_recompute_after_cashing_reflects_current_status(self, locker, market_account,
                                                             cheque_receipt):
        types = {market_account.id: AccountType.MARKET}
        before = locker.fold([cheque_receipt], types)
        cashed = cheque_receipt.mark_cashed(date(2025, 2, 1))
        after = locker.fold([cashed], types)

        assert before.closing == ZERO
        assert after.closing == Decimal("2.000")
        assert after.entries[0].affects_locker is True
        assert before.entries[0].affects_locker is False


class TestLockerFold:

    def test_running_balance_and_totals(self, locker, make_voucher, market_account, casting_account):
        types = {
            market_account.id: AccountType.MARKET,
            casting_account.id: AccountType.CASTING,
        }
        vouchers = [
            make_voucher(casting_account, VoucherKind.REC, gold="10", on=date(2025, 1, 1)),
            make_voucher(market_account, VoucherKind.INV, gold="4", on=date(2025, 1, 2)),
            make_voucher(market_account, VoucherKind.ALLOY, gold="9", on=date(2025, 1, 3)),
            make_voucher(casting_account, VoucherKind.INV, gold="1.5", on=date(2025, 1, 4)),
        ]
        run = locker.fold(vouchers, types, opening=Decimal("100"))

        assert [e.balance for e in run.entries] == [
            Decimal("110"), Decimal("106"), Decimal("106"), Decimal("104.5"),
        ]
        assert [e.affects_locker for e in run.entries] == [True, True, False, True]
        assert run.gold_in == Decimal("10")
        assert run.gold_out == Decimal("5.5")
        assert run.net_change == Decimal("4.5")

    def test_unknown_owner_is_reported(self, locker, make_voucher, market_account):
        voucher = make_voucher(market_account, VoucherKind.INV, gold="1")
        with pytest.raises(AccountNotFoundError):
            locker.fold([voucher], {})
