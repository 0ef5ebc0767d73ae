"""Infrastructure layer."""

from jewel_ledger.infrastructure.database import SessionLocal, get_db, init_db
from jewel_ledger.infrastructure.database.models import Account, Voucher
from jewel_ledger.infrastructure.repositories import SqlAccountRepository, SqlVoucherRepository
