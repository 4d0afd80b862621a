"""Ledger movement domain service."""

from typing import Iterable, Optional

from contabil.config.logging import get_logger
from contabil.database.base import Database
from contabil.domain.cache import StatementCache, cache_for
from contabil.domain.catalog import StatementType
from contabil.domain.client import ClientService
from contabil.domain.entities import ImportRow, Movement
from contabil.domain.errors import ValidationError, invalid_import_row, invalid_year

logger = get_logger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2999


def check_year(year: int) -> int:
    """Validate a fiscal year.

    Raises:
        ValidationError: If the year is not an int in the supported range
    """
    if isinstance(year, bool) or not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(invalid_year(year))
    return year


class MovementService:
    """Service for importing and reading monthly ledger balances."""

    def __init__(self, db: Database, cache: Optional[StatementCache] = None):
        """Initialize movement service.

        Args:
            db: Database instance
            cache: Statement cache to invalidate; defaults to the one shared per database
        """
        self.db = db
        self.cache = cache if cache is not None else cache_for(db)
        self.client_service = ClientService(db)

    def get_movements(
        self, client_id: int, year: int, statement_type: StatementType | str
    ) -> list[Movement]:
        """Get the movements of one period in import order.

        Raises:
            NotFoundError: If client not found
            ValidationError: If the year is out of range
        """
        self.client_service.require_client(client_id)
        check_year(year)
        return self.db.get_movements(client_id, year, StatementType.parse(statement_type))

    def replace_movements(
        self,
        client_id: int,
        year: int,
        statement_type: StatementType | str,
        rows: Iterable[ImportRow | Movement],
    ) -> int:
        """Replace every movement of one client, year and statement type.

        Rows that are not in the new set are gone afterwards; importing the
        same file twice leaves the same rows as importing it once.

        Args:
            client_id: Client ID
            year: Fiscal year
            statement_type: income/balance (dre/patrimonial accepted)
            rows: Parsed import rows or movements

        Returns:
            Number of movements stored

        Raises:
            NotFoundError: If client not found
            ValidationError: If year is out of range or a row has no code
        """
        self.client_service.require_client(client_id)
        check_year(year)
        statement_type = StatementType.parse(statement_type)

        movements = []
        for number, row in enumerate(rows, start=1):
            if isinstance(row, Movement):
                movement = row
            else:
                movement = row.to_movement(statement_type, year)
            if not movement.account_code:
                raise ValidationError(invalid_import_row(number, "account code is required"))
            movements.append(movement)

        count = self.db.replace_movements(client_id, year, statement_type, movements)
        self.cache.invalidate(client_id, year, statement_type)
        unmapped = sum(1 for m in movements if not m.is_mapped)
        logger.info(
            "movements_replaced",
            client_id=client_id,
            year=year,
            statement_type=statement_type.value,
            count=count,
            untagged=unmapped,
        )
        return count

    def delete_movements(
        self, client_id: int, year: int, statement_type: Optional[StatementType | str] = None
    ) -> int:
        """Delete the movements of a year, or of one statement in that year.

        Returns:
            Number of movements deleted
        """
        self.client_service.require_client(client_id)
        check_year(year)
        kind = StatementType.parse(statement_type) if statement_type is not None else None
        deleted = self.db.delete_movements(client_id, year, kind)
        self.cache.invalidate(client_id, year, kind)
        logger.info("movements_deleted", client_id=client_id, year=year, count=deleted)
        return deleted

    def list_periods(self, client_id: int) -> list[tuple[int, StatementType, int]]:
        """List the imported (year, statement_type, row_count) periods of a client."""
        self.client_service.require_client(client_id)
        return self.db.list_movement_periods(client_id)
