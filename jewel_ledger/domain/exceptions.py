"""
Typed exceptions for the ledger domain.

Every error carries a machine-readable ``code`` and derives from ValueError,
so callers that only know about ValueError still see a validation failure.
Store I/O errors are not wrapped here; they propagate unchanged.
"""

from datetime import date
from uuid import UUID


class LedgerError(ValueError):
    """Base class for ledger domain errors."""

    code: str = "LEDGER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InconsistentVoucherError(LedgerError):
    """A voucher violates one of its construction invariants."""

    code = "INCONSISTENT_VOUCHER"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidCapacityError(LedgerError):
    """Page capacity cannot hold the synthetic rows it must carry."""

    code = "INVALID_CAPACITY"

    def __init__(self, max_rows_per_page: int, reserved_rows: int):
        super().__init__(
            f"max_rows_per_page={max_rows_per_page} cannot hold "
            f"{reserved_rows} reserved row(s) plus any voucher row"
        )
        self.max_rows_per_page = max_rows_per_page
        self.reserved_rows = reserved_rows


class AccountNotFoundError(LedgerError):

    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: UUID):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class VoucherNotFoundError(LedgerError):

    code = "VOUCHER_NOT_FOUND"

    def __init__(self, voucher_id: UUID):
        super().__init__(f"Voucher {voucher_id} not found")
        self.voucher_id = voucher_id


class AccountInUseError(LedgerError):
    """Account still has vouchers and cannot be deleted."""

    code = "ACCOUNT_IN_USE"

    def __init__(self, account_id: UUID, voucher_count: int):
        super().__init__(
            f"Account {account_id} has {voucher_count} voucher(s) and cannot be deleted"
        )
        self.account_id = account_id
        self.voucher_count = voucher_count


class ChequeStateError(LedgerError):
    """Cheque workflow transition not allowed for this voucher."""

    code = "CHEQUE_STATE"

    def __init__(self, voucher_id: UUID, reason: str):
        super().__init__(f"Voucher {voucher_id}: {reason}")
        self.voucher_id = voucher_id
        self.reason = reason


class InvalidDateRangeError(LedgerError):

    code = "INVALID_DATE_RANGE"

    def __init__(self, start_date: date, end_date: date):
        super().__init__(f"start_date {start_date} is after end_date {end_date}")
        self.start_date = start_date
        self.end_date = end_date
