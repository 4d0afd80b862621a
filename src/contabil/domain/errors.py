"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidCategoryError(ValidationError):
    """A write path received a name that is not a canonical category."""

    def __init__(self, name: str):
        super().__init__(invalid_category(name))
        self.name = name


def client_not_found(client: int | str) -> str:
    """Return message for missing client."""
    if isinstance(client, int):
        return f"Client {client} not found"
    return f"Client '{client}' not found"


def duplicate_client_name(name: str) -> str:
    """Return message for duplicate client name."""
    return f"Client with name '{name}' already exists"


def invalid_category(name: str) -> str:
    """Return message for a non-canonical category on a write path."""
    return (
        f"Invalid category '{name}'. "
        "Use one of the canonical names listed by 'contabil categories list'"
    )


def line_not_found(line_id: str) -> str:
    """Return message for an unknown statement line."""
    return f"Statement line '{line_id}' not found"


def invalid_month(month: int) -> str:
    """Return message for a month index outside the fiscal year."""
    return f"Month must be between 1 and 12 (got {month + 1})"


def client_delete_blocked(client_id: int, account_count: int, movement_count: int) -> str:
    """Return message when a client still owns accounts or movements."""
    parts = []
    if account_count > 0:
        parts.append(f"{account_count} account{'s' if account_count != 1 else ''}")
    if movement_count > 0:
        parts.append(f"{movement_count} movement{'s' if movement_count != 1 else ''}")
    return (
        f"Cannot delete client {client_id}: it has {', '.join(parts)}. "
        "Use --force to delete them as well."
    )


def invalid_year(year: int) -> str:
    """Return message for a fiscal year outside the supported range."""
    return f"Year must be between 1900 and 2999 (got {year})"


def invalid_import_row(row_number: int, reason: str) -> str:
    """Return message for an import row that cannot be stored."""
    return f"Row {row_number}: {reason}"
