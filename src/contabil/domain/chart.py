"""Chart of accounts domain service."""

from typing import Iterable, Optional

from contabil.config.logging import get_logger
from contabil.database.base import Database
from contabil.domain.cache import StatementCache, cache_for
from contabil.domain.client import ClientService
from contabil.domain.entities import Account, AccountImportRow, AccountKind, UnmappedSummary
from contabil.domain.errors import ValidationError, invalid_import_row
from contabil.domain.statements import get_unmapped_summary

logger = get_logger(__name__)


def to_account(row: Account | AccountImportRow) -> Account:
    if isinstance(row, Account):
        return row
    return row.to_account()


class ChartOfAccountsService:
    """Service for a client's chart of accounts."""

    def __init__(self, db: Database, cache: Optional[StatementCache] = None):
        """Initialize chart of accounts service.

        Args:
            db: Database instance
            cache: Statement cache to invalidate; defaults to the one shared per database
        """
        self.db = db
        self.cache = cache if cache is not None else cache_for(db)
        self.client_service = ClientService(db)

    def list_accounts(self, client_id: int, kind: Optional[AccountKind] = None) -> list[Account]:
        """List a client's accounts ordered by code, optionally of one kind."""
        self.client_service.require_client(client_id)
        accounts = self.db.get_accounts(client_id)
        if kind is not None:
            accounts = [a for a in accounts if a.kind == kind]
        return accounts

    def get_account(self, client_id: int, code: str) -> Optional[Account]:
        return self.db.get_account(client_id, code.strip())

    def replace_accounts(self, client_id: int, rows: Iterable[Account | AccountImportRow]) -> int:
        """Replace the whole chart of accounts of a client.

        Args:
            client_id: Client ID
            rows: New chart entries

        Returns:
            Number of accounts stored

        Raises:
            NotFoundError: If client not found
            ValidationError: If a row has no code or no name
        """
        self.client_service.require_client(client_id)
        accounts = []
        for number, row in enumerate(rows, start=1):
            account = to_account(row)
            if not account.code:
                raise ValidationError(invalid_import_row(number, "account code is required"))
            if not account.name:
                raise ValidationError(invalid_import_row(number, f"account {account.code} has no name"))
            accounts.append(account)

        count = self.db.replace_accounts(client_id, accounts)
        # Category fallback reads the chart, so every cached period is stale
        self.cache.invalidate(client_id)
        logger.info("accounts_replaced", client_id=client_id, count=count)
        return count

    def get_unmapped_accounts(self, client_id: int) -> list[Account]:
        """Return analytic accounts whose report category does not resolve."""
        return list(self.mapping_stats(client_id).unmapped)

    def mapping_stats(self, client_id: int) -> UnmappedSummary:
        """Return mapping coverage over the client's analytic accounts."""
        return get_unmapped_summary(self.list_accounts(client_id))
