"""Client domain service."""

from typing import Optional

from contabil.config.logging import get_logger
from contabil.database.base import Database
from contabil.domain.cache import StatementCache, cache_for
from contabil.domain.entities import Client as ClientEntity
from contabil.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    client_delete_blocked,
    client_not_found,
    duplicate_client_name,
)

logger = get_logger(__name__)


class ClientService:
    """Service for managing clients."""

    def __init__(self, db: Database, cache: Optional[StatementCache] = None):
        """Initialize client service.

        Args:
            db: Database instance
            cache: Statement cache to invalidate; defaults to the one shared per database
        """
        self.db = db
        self.cache = cache if cache is not None else cache_for(db)

    def create_client(self, name: str) -> int:
        """Create a new client.

        Args:
            name: Client name

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If client name already exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Client name cannot be empty")
        if self.db.get_client_by_name(name) is not None:
            raise ConflictError(duplicate_client_name(name))

        client_id = self.db.create_client(name=name)
        logger.info("client_created", client_id=client_id)
        return client_id

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID.

        Args:
            client_id: Client ID

        Returns:
            Client entity or None if not found
        """
        return self.db.get_client(client_id)

    def require_client(self, client_id: int) -> ClientEntity:
        """Get client by ID or raise NotFoundError."""
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def list_clients(self) -> list[ClientEntity]:
        """List all clients.

        Returns:
            List of client entities
        """
        return self.db.list_clients()

    def rename_client(self, client_id: int, name: str) -> None:
        """Rename a client.

        Raises:
            NotFoundError: If client not found
            ConflictError: If name already exists
        """
        self.require_client(client_id)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Client name cannot be empty")

        existing = self.db.get_client_by_name(name)
        if existing is not None and existing.id != client_id:
            raise ConflictError(duplicate_client_name(name))

        self.db.rename_client(client_id=client_id, name=name)

    def delete_client(self, client_id: int, force: bool = False) -> None:
        """Delete a client.

        Args:
            client_id: Client ID to delete
            force: Also delete the client's chart, movements and mappings

        Raises:
            NotFoundError: If client not found
            ConflictError: If the client still owns data and force is not set
        """
        self.require_client(client_id)

        account_count = self.db.get_client_account_count(client_id)
        movement_count = self.db.get_client_movement_count(client_id)
        if (account_count > 0 or movement_count > 0) and not force:
            raise ConflictError(client_delete_blocked(client_id, account_count, movement_count))

        self.db.delete_client(client_id, force=force)
        self.cache.invalidate(client_id)
        logger.info("client_deleted", client_id=client_id, accounts=account_count, movements=movement_count)
