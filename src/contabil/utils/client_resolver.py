"""Utility for resolving client names to IDs."""

from contabil.domain.client import ClientService
from contabil.domain.errors import NotFoundError, client_not_found


def resolve_client(client_service: ClientService, client: str | int) -> int:
    """Resolve client name or ID to client ID.

    Args:
        client_service: ClientService instance
        client: Client name (str) or ID (int or string representation of int)

    Returns:
        Client ID

    Raises:
        NotFoundError: If client is not found
    """
    if isinstance(client, int):
        client_id = client
    else:
        try:
            client_id = int(client)
        except (ValueError, TypeError):
            client_id = None

    if client_id is not None:
        if client_service.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        return client_id

    # Not a number, treat as name
    for existing in client_service.list_clients():
        if existing.name == client:
            return existing.id

    raise NotFoundError(client_not_found(client))
