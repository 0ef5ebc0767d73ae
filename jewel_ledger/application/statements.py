"""
Application - Statement use cases.

Every ledger report is a thin caller of the domain: it picks a scope and a
date window, asks the resolver for the opening balance, folds the window with
the matching accumulator and hands the entries to the paginator.
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from uuid import UUID

from jewel_ledger.application.dto.ledger_dto import (
    AccountBalanceDTO,
    AccountResponseDTO,
    BalancePairDTO,
    LedgerTotalsDTO,
    LockerRowDTO,
    LockerStatementDTO,
    OpenBalanceRowDTO,
    OpenBalanceStatementDTO,
    PageDTO,
    TradingRowDTO,
    TradingStatementDTO,
    TypeBalancesDTO,
    TypeSummaryDTO,
    TypeTotalDTO,
)
from jewel_ledger.core.logging_config import get_logger
from jewel_ledger.domain.entities import Account, LedgerEntry, LedgerRun, LockerEntry
from jewel_ledger.domain.exceptions import AccountNotFoundError, InvalidDateRangeError
from jewel_ledger.domain.pagination import Page, StatementPaginator
from jewel_ledger.domain.services import (
    IAccountRepository,
    IVoucherRepository,
    OpeningBalanceResolver,
)
from jewel_ledger.domain.value_objects import AccountType, BalancePair, VoucherKind, quantize

logger = get_logger("statements")

# Project ledgers are kept in gold only.
GOLD_ONLY_TYPES = frozenset({AccountType.PROJECT})


def validate_window(start_date: date | None, end_date: date | None) -> None:
    if start_date is not None and end_date is not None and start_date > end_date:
        raise InvalidDateRangeError(start_date, end_date)


def pair_dto(pair: BalancePair) -> BalancePairDTO:
    rounded = pair.quantized()
    return BalancePairDTO(gold=rounded.gold, kwd=rounded.kwd)


def totals_dto(run: LedgerRun) -> LedgerTotalsDTO:
    totals = run.totals()
    return LedgerTotalsDTO(
        gold_debit=quantize(totals.gold_debit),
        gold_credit=quantize(totals.gold_credit),
        kwd_debit=quantize(totals.kwd_debit),
        kwd_credit=quantize(totals.kwd_credit),
    )


def account_dto(account: Account) -> AccountResponseDTO:
    return AccountResponseDTO.model_validate(account)


def trading_row(entry: LedgerEntry, account: Account | None = None) -> TradingRowDTO:
    voucher = entry.voucher
    return TradingRowDTO(
        voucher_id=voucher.id,
        date=voucher.date,
        kind=voucher.kind,
        reference=voucher.reference,
        account_no=account.account_no if account else None,
        account_name=account.name if account else None,
        gold_change=quantize(entry.gold_change),
        kwd_change=quantize(entry.kwd_change),
        gold_balance=quantize(entry.gold_balance),
        kwd_balance=quantize(entry.kwd_balance),
    )


def locker_row(entry: LockerEntry, account: Account) -> LockerRowDTO:
    voucher = entry.voucher
    return LockerRowDTO(
        voucher_id=voucher.id,
        date=voucher.date,
        kind=voucher.kind,
        reference=voucher.reference,
        account_type=entry.account_type,
        account_name=account.name,
        payment_method=voucher.payment_method,
        locker_change=quantize(entry.change),
        locker_balance=quantize(entry.balance),
        affects_locker=entry.affects_locker,
    )


def open_balance_row(entry: LedgerEntry, account: Account) -> OpenBalanceRowDTO:
    voucher = entry.voucher
    return OpenBalanceRowDTO(
        voucher_id=voucher.id,
        date=voucher.date,
        kind=voucher.kind,
        reference=voucher.reference,
        account_type=account.account_type,
        account_name=account.name,
        gold_rate=voucher.gold_rate,
        gold_change=quantize(entry.gold_change),
        kwd_change=quantize(entry.kwd_change),
        gold_balance=quantize(entry.gold_balance),
        kwd_balance=quantize(entry.kwd_balance),
    )


def page_dtos(pages: Sequence[Page], row_type: type, render) -> list[PageDTO]:
    return [
        PageDTO[row_type](
            number=page.number,
            rows=[render(entry) for entry in page.entries],
            opening_row=page.opening_row,
            closing_row=page.closing_row,
        )
        for page in pages
    ]


class StatementService:
    """Builds paginated ledger statements and balance summaries."""

    def __init__(
        self,
        account_repo: IAccountRepository,
        voucher_repo: IVoucherRepository,
        statement_rows_per_page: int,
        locker_rows_per_page: int,
    ):
        self.account_repo = account_repo
        self.voucher_repo = voucher_repo
        self.resolver = OpeningBalanceResolver(account_repo, voucher_repo)
        self.statement_paginator = StatementPaginator(statement_rows_per_page)
        self.locker_paginator = StatementPaginator(locker_rows_per_page)

    def _account(self, account_id: UUID) -> Account:
        account = self.account_repo.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def _trading_statement(
        self,
        accounts: list[Account],
        account_type: AccountType,
        opening: BalancePair,
        start_date: date | None,
        end_date: date | None,
        single: Account | None = None,
    ) -> TradingStatementDTO:
        by_id = {a.id: a for a in accounts}
        window = self.voucher_repo.list_vouchers(list(by_id), start=start_date, end=end_date)
        run = self.resolver.balances.fold(window, opening)
        pages = self.statement_paginator.paginate(run.entries)

        def render(entry: LedgerEntry) -> TradingRowDTO:
            return trading_row(entry, None if single else by_id[entry.voucher.account_id])

        return TradingStatementDTO(
            start_date=start_date,
            end_date=end_date,
            rows_per_page=self.statement_paginator.max_rows_per_page,
            page_count=len(pages),
            transaction_count=len(run.entries),
            account=account_dto(single) if single else None,
            account_type=account_type,
            gold_only=account_type in GOLD_ONLY_TYPES,
            opening=pair_dto(run.opening),
            closing=pair_dto(run.closing),
            period=pair_dto(run.period),
            totals=totals_dto(run),
            pages=page_dtos(pages, TradingRowDTO, render),
        )

    def account_statement(
        self,
        account_id: UUID,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> TradingStatementDTO:
        validate_window(start_date, end_date)
        account = self._account(account_id)
        opening = self.resolver.account_opening(account.id, start_date)
        statement = self._trading_statement(
            [account], account.account_type, opening, start_date, end_date, single=account
        )
        logger.info(
            "account_statement_built",
            extra={
                "account_id": account.id,
                "start_date": start_date,
                "end_date": end_date,
                "transactions": statement.transaction_count,
                "pages": statement.page_count,
            },
        )
        return statement

    def type_statement(
        self,
        account_type: AccountType,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> TradingStatementDTO:
        validate_window(start_date, end_date)
        accounts = self.resolver.active_accounts(account_type)
        opening = self.resolver.trading_opening([a.id for a in accounts], start_date)
        statement = self._trading_statement(accounts, account_type, opening, start_date, end_date)
        logger.info(
            "type_statement_built",
            extra={
                "account_type": account_type,
                "accounts": len(accounts),
                "transactions": statement.transaction_count,
                "pages": statement.page_count,
            },
        )
        return statement

    def locker_statement(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> LockerStatementDTO:
        validate_window(start_date, end_date)
        accounts = self.resolver.active_accounts()
        by_id = {a.id: a for a in accounts}
        opening = self.resolver.locker_opening(start_date)
        window = self.voucher_repo.list_vouchers(list(by_id), start=start_date, end=end_date)
        run = self.resolver.locker.fold(window, self.resolver.account_types(accounts), opening)
        pages = self.locker_paginator.paginate(run.entries)

        logger.info(
            "locker_statement_built",
            extra={
                "start_date": start_date,
                "end_date": end_date,
                "transactions": len(run.entries),
                "pages": len(pages),
            },
        )
        return LockerStatementDTO(
            start_date=start_date,
            end_date=end_date,
            rows_per_page=self.locker_paginator.max_rows_per_page,
            page_count=len(pages),
            transaction_count=len(run.entries),
            opening_gold=quantize(run.opening),
            closing_gold=quantize(run.closing),
            gold_in=quantize(run.gold_in),
            gold_out=quantize(run.gold_out),
            net_change=quantize(run.net_change),
            pages=page_dtos(
                pages, LockerRowDTO, lambda e: locker_row(e, by_id[e.voucher.account_id])
            ),
        )

    def open_balance_statement(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> OpenBalanceStatementDTO:
        validate_window(start_date, end_date)
        accounts = self.account_repo.list_accounts()
        by_id = {a.id: a for a in accounts}
        opening = self.resolver.open_balance_opening(start_date)
        window = self.voucher_repo.list_vouchers(
            start=start_date, end=end_date, kinds=(VoucherKind.REC, VoucherKind.GFV)
        )
        run = self.resolver.open_balance.fold(window, self.resolver.account_types(accounts), opening)
        pages = self.statement_paginator.paginate(run.entries)

        logger.info(
            "open_balance_statement_built",
            extra={
                "start_date": start_date,
                "end_date": end_date,
                "fixing_receipts": run.fixing_receipt_count,
                "gold_fixing_vouchers": run.gold_fixing_voucher_count,
                "pages": len(pages),
            },
        )
        return OpenBalanceStatementDTO(
            start_date=start_date,
            end_date=end_date,
            rows_per_page=self.statement_paginator.max_rows_per_page,
            page_count=len(pages),
            transaction_count=run.transaction_count,
            opening=pair_dto(run.opening),
            closing=pair_dto(run.closing),
            period=pair_dto(run.period),
            fixing_receipt_count=run.fixing_receipt_count,
            gold_fixing_voucher_count=run.gold_fixing_voucher_count,
            pages=page_dtos(
                pages, OpenBalanceRowDTO,
                lambda e: open_balance_row(e, by_id[e.voucher.account_id]),
            ),
        )

    def type_balances(
        self,
        account_type: AccountType,
        end_date: date | None = None,
    ) -> TypeBalancesDTO:
        accounts = self.resolver.active_accounts(account_type)
        history = self.voucher_repo.list_vouchers([a.id for a in accounts], end=end_date)
        per_account = defaultdict(list)
        for voucher in history:
            per_account[voucher.account_id].append(voucher)

        rows: list[AccountBalanceDTO] = []
        total = BalancePair.zero()
        for account in accounts:
            vouchers = per_account.get(account.id, [])
            closing = self.resolver.balances.closing(vouchers)
            total = total + closing
            rows.append(AccountBalanceDTO(
                account_id=account.id,
                account_no=account.account_no,
                name=account.name,
                balance=pair_dto(closing),
                transaction_count=len(vouchers),
            ))

        return TypeBalancesDTO(
            account_type=account_type,
            end_date=end_date,
            gold_only=account_type in GOLD_ONLY_TYPES,
            accounts=rows,
            total=pair_dto(total),
            transaction_count=len(history),
        )

    def type_summary(self, end_date: date | None = None) -> TypeSummaryDTO:
        types = []
        for account_type in AccountType:
            balances = self.type_balances(account_type, end_date)
            types.append(TypeTotalDTO(
                account_type=account_type,
                account_count=len(balances.accounts),
                transaction_count=balances.transaction_count,
                balance=balances.total,
            ))
        return TypeSummaryDTO(end_date=end_date, types=types)
