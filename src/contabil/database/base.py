"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from contabil.domain.catalog import StatementType
from contabil.domain.entities import (
    Account,
    CategoryMapping,
    Client,
    Movement,
)

# Rows are written in chunks of this size during a full replace
INSERT_BATCH_SIZE = 100


class Database(ABC):
    """Abstract database interface for contabil."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(self, name: str) -> int:
        """Create a new client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_name(self, name: str) -> Optional[Client]:
        """Get client by exact name."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients."""
        pass

    @abstractmethod
    def rename_client(self, client_id: int, name: str) -> None:
        """Rename a client."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int, force: bool = False) -> None:
        """Delete a client; with force, its accounts, movements and mappings too."""
        pass

    @abstractmethod
    def get_client_account_count(self, client_id: int) -> int:
        """Get count of chart-of-accounts entries owned by a client."""
        pass

    @abstractmethod
    def get_client_movement_count(self, client_id: int) -> int:
        """Get count of movements owned by a client."""
        pass

    # Chart of accounts operations
    @abstractmethod
    def get_accounts(self, client_id: int) -> list[Account]:
        """Get a client's chart of accounts ordered by code."""
        pass

    @abstractmethod
    def get_account(self, client_id: int, code: str) -> Optional[Account]:
        """Get one chart-of-accounts entry by code."""
        pass

    @abstractmethod
    def replace_accounts(self, client_id: int, accounts: Iterable[Account]) -> int:
        """Replace a client's whole chart of accounts. Returns rows written."""
        pass

    # Movement operations
    @abstractmethod
    def get_movements(
        self, client_id: int, year: int, statement_type: StatementType
    ) -> list[Movement]:
        """Get the movements of one client, year and statement type in import order."""
        pass

    @abstractmethod
    def replace_movements(
        self,
        client_id: int,
        year: int,
        statement_type: StatementType,
        movements: Iterable[Movement],
    ) -> int:
        """Replace the movements of one client, year and statement type.

        Deletes the existing rows, then inserts the new ones in batches of
        INSERT_BATCH_SIZE, in a single transaction. Returns rows written.
        """
        pass

    @abstractmethod
    def delete_movements(
        self, client_id: int, year: int, statement_type: Optional[StatementType] = None
    ) -> int:
        """Delete the movements of a client and year. Returns rows deleted."""
        pass

    @abstractmethod
    def list_movement_periods(self, client_id: int) -> list[tuple[int, StatementType, int]]:
        """List (year, statement_type, row_count) triples imported for a client."""
        pass

    # Category mapping operations
    @abstractmethod
    def upsert_category_mapping(
        self, client_id: int, account_code: str, account_name: str, category: str
    ) -> int:
        """Insert or update the mapping of an account code. Returns mapping ID.

        Also writes the category to the matching chart-of-accounts entry.
        """
        pass

    @abstractmethod
    def delete_category_mapping(self, client_id: int, account_code: str) -> bool:
        """Delete the mapping of an account code. Returns True if one existed."""
        pass

    @abstractmethod
    def list_category_mappings(self, client_id: int) -> list[CategoryMapping]:
        """List a client's mappings ordered by account code."""
        pass
