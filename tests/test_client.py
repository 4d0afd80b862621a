"""Tests for the client service and commands."""

import pytest

from contabil.cli.main import cli
from contabil.domain.catalog import StatementType
from contabil.domain.errors import ConflictError, NotFoundError, ValidationError
from contabil.utils.client_resolver import resolve_client


class TestClientService:
    """Tests for ClientService."""

    def test_create_and_get(self, client_service):
        client_id = client_service.create_client("  Padaria Central ")
        client = client_service.get_client(client_id)
        assert client.name == "Padaria Central"

    def test_create_blank_name(self, client_service):
        with pytest.raises(ValidationError):
            client_service.create_client("   ")

    def test_create_duplicate(self, client_service, sample_client):
        with pytest.raises(ConflictError, match="already exists"):
            client_service.create_client("Padaria Central")

    def test_require_client(self, client_service):
        with pytest.raises(NotFoundError, match="Client 99 not found"):
            client_service.require_client(99)

    def test_rename(self, client_service, sample_client):
        client_service.rename_client(sample_client.id, "Padaria Nova")
        assert client_service.get_client(sample_client.id).name == "Padaria Nova"

    def test_rename_to_existing_name(self, client_service, sample_client):
        client_service.create_client("Mercado Sol")
        with pytest.raises(ConflictError):
            client_service.rename_client(sample_client.id, "Mercado Sol")

    def test_rename_to_own_name(self, client_service, sample_client):
        client_service.rename_client(sample_client.id, "Padaria Central")

    def test_delete_empty_client(self, client_service, sample_client):
        client_service.delete_client(sample_client.id)
        assert client_service.get_client(sample_client.id) is None

    def test_delete_client_with_data(self, client_service, loaded_client):
        with pytest.raises(ConflictError, match="Use --force"):
            client_service.delete_client(loaded_client.id)

        client_service.delete_client(loaded_client.id, force=True)
        assert client_service.list_clients() == []

    def test_delete_client_drops_cached_reports(self, client_service, report_service, loaded_client):
        """A deleted client's aggregation is never served to a later client."""
        report_service.income_statement(loaded_client.id, 2024, 0)
        assert (loaded_client.id, 2024, StatementType.INCOME) in report_service.cache

        client_service.delete_client(loaded_client.id, force=True)
        assert (loaded_client.id, 2024, StatementType.INCOME) not in report_service.cache

        new_id = client_service.create_client(name="Mercado Novo")
        assert new_id != loaded_client.id
        assert report_service.income_statement(new_id, 2024, 0).value("gross_revenue") == 0


class TestResolveClient:
    """Tests for client name/ID resolution."""

    def test_by_id_and_name(self, client_service, sample_client):
        assert resolve_client(client_service, sample_client.id) == sample_client.id
        assert resolve_client(client_service, str(sample_client.id)) == sample_client.id
        assert resolve_client(client_service, "Padaria Central") == sample_client.id

    def test_not_found(self, client_service):
        with pytest.raises(NotFoundError, match="Client 'Nada' not found"):
            resolve_client(client_service, "Nada")
        with pytest.raises(NotFoundError, match="Client 5 not found"):
            resolve_client(client_service, "5")


def test_client_create_command(cli_runner, temp_db):
    """Test creating a client from the command line."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "create", "Padaria Central"])

    assert result.exit_code == 0
    assert "Created client 'Padaria Central'" in result.output


def test_client_create_duplicate_command(cli_runner, temp_db, sample_client):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "create", "Padaria Central"])

    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_client_list_command(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "list"])
    assert result.exit_code == 0
    assert "No clients found" in result.output


def test_client_list_with_data(cli_runner, temp_db, sample_client):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "list"])
    assert result.exit_code == 0
    assert "Padaria Central" in result.output


def test_client_rename_command(cli_runner, temp_db, sample_client):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "client", "rename", "Padaria Central", "Padaria Nova"]
    )
    assert result.exit_code == 0
    assert "Renamed client to 'Padaria Nova'" in result.output


def test_client_delete_command(cli_runner, temp_db, sample_client):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "client", "delete", "Padaria Central", "--yes"]
    )
    assert result.exit_code == 0
    assert "Deleted client 'Padaria Central'" in result.output


def test_client_delete_blocked_command(cli_runner, temp_db, loaded_client):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "delete", "1", "--yes"])
    assert result.exit_code == 1
    assert "--force" in result.output


def test_unknown_client_command(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "accounts", "list", "Nada"])
    assert result.exit_code == 1
    assert "Client 'Nada' not found" in result.output
