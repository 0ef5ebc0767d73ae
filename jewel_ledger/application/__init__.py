"""Application layer - Use cases and DTOs."""

from jewel_ledger.application.bookkeeping import AccountService, VoucherService
from jewel_ledger.application.dto.ledger_dto import (
    AccountCreateDTO,
    AccountResponseDTO,
    LockerStatementDTO,
    OpenBalanceStatementDTO,
    TradingStatementDTO,
    TypeBalancesDTO,
    TypeSummaryDTO,
    VoucherCreateDTO,
    VoucherResponseDTO,
)
from jewel_ledger.application.statements import StatementService
