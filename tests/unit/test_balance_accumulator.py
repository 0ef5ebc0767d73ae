"""
Unit tests - Trading balance fold.
Sign table, chronological ordering, opening replay and period totals.
"""

from datetime import date
from decimal import Decimal

import pytest

from jewel_ledger.domain.balances import BalanceAccumulator, chronological
from jewel_ledger.domain.value_objects import AccountType, BalancePair, VoucherKind


@pytest.fixture
def accumulator() -> BalanceAccumulator:
    return BalanceAccumulator()


class TestSignTable:
    """Gold and KWD direction per voucher kind."""

    @pytest.mark.parametrize("kind, gold, kwd", [
        (VoucherKind.INV, "1.500", "30.000"),
        (VoucherKind.ALLOY, "1.500", "30.000"),
        (VoucherKind.REC, "-1.500", "-30.000"),
        (VoucherKind.GFV, "1.500", "-30.000"),
    ])
    def test_change_per_kind(self, accumulator, make_voucher, gold_fixing_account, kind, gold, kwd):
        voucher = make_voucher(gold_fixing_account, kind, gold="1.500", kwd="30.000")
        change = accumulator.change_for(voucher)
        assert change == BalancePair(Decimal(gold), Decimal(kwd))

    def test_alloy_trades_like_invoice(self, accumulator, make_voucher, casting_account):
        inv = make_voucher(casting_account, VoucherKind.INV, gold="3", kwd="7")
        alloy = make_voucher(casting_account, VoucherKind.ALLOY, gold="3", kwd="7")
        assert accumulator.change_for(inv) == accumulator.change_for(alloy)

    def test_rule_ignores_account_type(self, accumulator, make_voucher, market_account, casting_account):
        a = make_voucher(market_account, VoucherKind.REC, gold="2", kwd="4")
        b = make_voucher(casting_account, VoucherKind.REC, gold="2", kwd="4")
        assert accumulator.change_for(a) == accumulator.change_for(b)


class TestFold:
    """Running balances after each voucher."""

    def test_three_invoices_running_gold(self, accumulator, make_voucher, market_account):
        vouchers = [
            make_voucher(market_account, VoucherKind.INV, gold=g, on=date(2025, 1, d))
            for d, g in ((1, "1.000"), (2, "2.500"), (3, "0.250"))
        ]
        run = accumulator.fold(vouchers)
        assert [e.gold_balance for e in run.entries] == [
            Decimal("1.000"), Decimal("3.500"), Decimal("3.750"),
        ]
        assert run.closing.gold == Decimal("3.750")

    def test_receipt_then_gold_fixing(self, accumulator, make_voucher, gold_fixing_account):
        rec = make_voucher(gold_fixing_account, VoucherKind.REC, gold="1.000", kwd="5.000",
                           on=date(2025, 2, 1))
        gfv = make_voucher(gold_fixing_account, VoucherKind.GFV, gold="1.000", kwd="5.000",
                           on=date(2025, 2, 2))
        run = accumulator.fold([gfv, rec])

        assert run.entries[0].balance == BalancePair(Decimal("-1.000"), Decimal("-5.000"))
        assert run.entries[1].balance.quantized() == BalancePair(
            Decimal("0.000"), Decimal("-10.000")
        )

    def test_empty_sequence_returns_opening(self, accumulator):
        opening = BalancePair(Decimal("4.2"), Decimal("-1"))
        run = accumulator.fold([], opening)
        assert run.entries == ()
        assert run.closing == opening
        assert run.period == BalancePair.zero()

    def test_same_date_keeps_creation_order(self, accumulator, make_voucher, market_account):
        first = make_voucher(market_account, VoucherKind.INV, gold="1", on=date(2025, 3, 1))
        second = make_voucher(market_account, VoucherKind.REC, gold="1", on=date(2025, 3, 1))
        later = make_voucher(market_account, VoucherKind.INV, gold="5", on=date(2025, 3, 2))

        ordered = chronological([later, second, first])
        assert [v.id for v in ordered] == [first.id, second.id, later.id]

        run = accumulator.fold([later, second, first])
        assert [e.gold_balance for e in run.entries] == [Decimal("1"), Decimal("0"), Decimal("5")]

    def test_no_rounding_inside_the_fold(self, accumulator, make_voucher, market_account):
        vouchers = [
            make_voucher(market_account, VoucherKind.INV, gold="0.0004", on=date(2025, 1, d))
            for d in (1, 2, 3)
        ]
        run = accumulator.fold(vouchers)
        assert run.closing.gold == Decimal("0.0012")
        assert run.closing.quantized().gold == Decimal("0.001")

    def test_fold_is_repeatable(self, accumulator, make_voucher, market_account):
        vouchers = [
            make_voucher(market_account, VoucherKind.INV, gold="1.111", kwd="9", on=date(2025, 1, 1)),
            make_voucher(market_account, VoucherKind.REC, gold="0.5", kwd="3", on=date(2025, 1, 2)),
            make_voucher(market_account, VoucherKind.ALLOY, gold="0.01", on=date(2025, 1, 3)),
        ]
        assert accumulator.fold(vouchers) == accumulator.fold(vouchers)


class TestSplitReplay:
    """Opening-before-X plus window-from-X equals the full replay."""

    @pytest.mark.parametrize("split_day", [1, 2, 3, 4, 5, 6])
    def test_any_split_date_gives_same_closing(self, accumulator, make_voucher, market_account,
                                               split_day):
        history = [
            make_voucher(market_account, VoucherKind.INV, gold="2.125", kwd="50", on=date(2025, 4, 1)),
            make_voucher(market_account, VoucherKind.REC, gold="1.000", kwd="20", on=date(2025, 4, 2)),
            make_voucher(market_account, VoucherKind.ALLOY, gold="0.333", kwd="1", on=date(2025, 4, 3)),
            make_voucher(market_account, VoucherKind.REC, gold="0.750", kwd="11", on=date(2025, 4, 5)),
        ]
        split = date(2025, 4, split_day)
        opening = accumulator.closing([v for v in history if v.date < split])
        windowed = accumulator.fold([v for v in history if v.date >= split], opening)

        assert windowed.closing == accumulator.closing(history)


class TestTotals:

    def test_debit_and_credit_split_by_sign(self, accumulator, make_voucher, gold_fixing_account):
        run = accumulator.fold([
            make_voucher(gold_fixing_account, VoucherKind.INV, gold="3", kwd="10", on=date(2025, 5, 1)),
            make_voucher(gold_fixing_account, VoucherKind.REC, gold="1", kwd="4", on=date(2025, 5, 2)),
            make_voucher(gold_fixing_account, VoucherKind.GFV, gold="2", kwd="6", on=date(2025, 5, 3)),
        ])
        totals = run.totals()
        assert totals.gold_debit == Decimal("5")
        assert totals.gold_credit == Decimal("1")
        assert totals.kwd_debit == Decimal("10")
        assert totals.kwd_credit == Decimal("10")
        assert run.period == BalancePair(Decimal("4"), Decimal("0"))

    def test_project_statement_amounts(self, accumulator, make_account, make_voucher):
        project = make_account(AccountType.PROJECT)
        run = accumulator.fold([make_voucher(project, VoucherKind.INV, gold="7.5")])
        assert run.closing == BalancePair(Decimal("7.5"), Decimal("0"))
