"""Domain layer - Pure Python business logic."""

from jewel_ledger.domain.balances import (
    BalanceAccumulator,
    LockerAccumulator,
    OpenBalanceAccumulator,
    chronological,
)
from jewel_ledger.domain.entities import (
    Account,
    LedgerEntry,
    LedgerRun,
    LedgerTotals,
    LockerEntry,
    LockerRun,
    OpenBalanceRun,
    Voucher,
)
from jewel_ledger.domain.exceptions import (
    AccountInUseError,
    AccountNotFoundError,
    ChequeStateError,
    InconsistentVoucherError,
    InvalidCapacityError,
    InvalidDateRangeError,
    LedgerError,
    VoucherNotFoundError,
)
from jewel_ledger.domain.pagination import Page, StatementPaginator, rows_per_page
from jewel_ledger.domain.services import (
    IAccountRepository,
    IVoucherRepository,
    OpeningBalanceResolver,
)
from jewel_ledger.domain.value_objects import (
    AccountType,
    BalancePair,
    ChequeDetails,
    PaymentMethod,
    VoucherKind,
    quantize,
)
