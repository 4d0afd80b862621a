"""Category mapping domain service."""

from typing import Iterable, Optional

from contabil.config.logging import get_logger
from contabil.database.base import Database
from contabil.domain.cache import StatementCache, cache_for
from contabil.domain.catalog import CanonicalCategory, StatementType
from contabil.domain.client import ClientService
from contabil.domain.entities import CategoryMapping, UnmappedSummary
from contabil.domain.errors import ValidationError
from contabil.domain.resolver import require_canonical
from contabil.domain.statements import get_unmapped_summary

logger = get_logger(__name__)


class MappingService:
    """Service for assigning account codes to canonical categories.

    Reads are permissive (any alias resolves) but writes are strict: only an
    exact canonical name is stored.
    """

    def __init__(self, db: Database, cache: Optional[StatementCache] = None):
        """Initialize mapping service.

        Args:
            db: Database instance
            cache: Statement cache to invalidate; defaults to the one shared per database
        """
        self.db = db
        self.cache = cache if cache is not None else cache_for(db)
        self.client_service = ClientService(db)

    def list_mappings(self, client_id: int) -> list[CategoryMapping]:
        self.client_service.require_client(client_id)
        return self.db.list_category_mappings(client_id)

    def upsert_mapping(
        self,
        client_id: int,
        account_code: str,
        category: str,
        account_name: Optional[str] = None,
    ) -> int:
        """Map an account code to a canonical category.

        Args:
            client_id: Client ID
            account_code: Chart-of-accounts code
            category: Exact canonical category name
            account_name: Name to store; defaults to the chart entry's name

        Returns:
            Mapping ID

        Raises:
            InvalidCategoryError: If category is not an exact canonical name
            NotFoundError: If client not found
            ValidationError: If account code is blank
        """
        canonical = require_canonical(category)
        self.client_service.require_client(client_id)
        code = (account_code or "").strip()
        if not code:
            raise ValidationError("Account code cannot be empty")

        if account_name is None:
            account = self.db.get_account(client_id, code)
            account_name = account.name if account is not None else code

        mapping_id = self.db.upsert_category_mapping(client_id, code, account_name, canonical.value)
        self.cache.invalidate(client_id)
        logger.info("mapping_saved", client_id=client_id, account_code=code, category=canonical.value)
        return mapping_id

    def upsert_mappings(self, client_id: int, mappings: Iterable[tuple[str, str]]) -> int:
        """Save several (account_code, category) pairs.

        Every category is validated before any is written, so a bad name
        leaves storage untouched.

        Returns:
            Number of mappings saved
        """
        pairs = [(code, require_canonical(category)) for code, category in mappings]
        for code, canonical in pairs:
            self.upsert_mapping(client_id, code, canonical.value)
        return len(pairs)

    def delete_mapping(self, client_id: int, account_code: str) -> bool:
        """Remove a mapping and clear the chart entry's report category.

        Returns:
            True if a mapping existed
        """
        self.client_service.require_client(client_id)
        deleted = self.db.delete_category_mapping(client_id, account_code.strip())
        if deleted:
            self.cache.invalidate(client_id)
            logger.info("mapping_deleted", client_id=client_id, account_code=account_code)
        return deleted

    def get_unmapped_summary(
        self,
        client_id: int,
        year: Optional[int] = None,
        statement_type: Optional[StatementType | str] = None,
    ) -> UnmappedSummary:
        """Summarize mapping coverage for a client.

        With a year and statement type, covers the leaf ledger rows of that
        period; otherwise covers the analytic accounts of the chart.
        """
        self.client_service.require_client(client_id)
        accounts = self.db.get_accounts(client_id)
        movements = []
        if year is not None and statement_type is not None:
            movements = self.db.get_movements(client_id, year, StatementType.parse(statement_type))
        summary = get_unmapped_summary(accounts, movements)
        logger.info(
            "unmapped_summary",
            client_id=client_id,
            total=summary.total,
            unmapped=summary.unmapped_count,
        )
        return summary

    @staticmethod
    def available_categories(statement_type: Optional[StatementType | str] = None) -> list[CanonicalCategory]:
        """List the canonical categories, optionally for one statement type."""
        if statement_type is None:
            return list(CanonicalCategory)
        kind = StatementType.parse(statement_type)
        return [c for c in CanonicalCategory if c.statement_type == kind]
