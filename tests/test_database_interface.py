"""Tests for Database interface returning domain models."""

import pytest
from datetime import datetime

from conftest import make_movement, monthly
from contabil.database.factories import create_sqlite_database
from contabil.domain import entities
from contabil.domain.catalog import StatementType
from contabil.domain.errors import ConflictError, NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_client_returns_domain_model(self, temp_db):
        """Test that get_client returns a domain Client entity."""
        client_id = temp_db.create_client(name="Padaria Central")

        client = temp_db.get_client(client_id)

        assert isinstance(client, entities.Client)
        assert client.id == client_id
        assert client.name == "Padaria Central"
        assert isinstance(client.created_at, datetime)

    def test_get_client_missing(self, temp_db):
        assert temp_db.get_client(999) is None
        assert temp_db.get_client_by_name("Nada") is None

    def test_list_clients_ordered_by_name(self, temp_db):
        temp_db.create_client(name="Zeta")
        temp_db.create_client(name="Alfa")

        clients = temp_db.list_clients()

        assert [c.name for c in clients] == ["Alfa", "Zeta"]
        assert all(isinstance(c, entities.Client) for c in clients)

    def test_create_duplicate_client(self, temp_db):
        temp_db.create_client(name="Alfa")
        with pytest.raises(ConflictError):
            temp_db.create_client(name="Alfa")

    def test_get_accounts_returns_domain_models(self, temp_db, sample_client, sample_accounts):
        """Accounts come back ordered by code as domain entities."""
        written = temp_db.replace_accounts(sample_client.id, sample_accounts)

        accounts = temp_db.get_accounts(sample_client.id)

        assert written == 6
        assert [a.code for a in accounts] == ["03", "03.1", "04", "04.1", "04.2", "04.3"]
        assert all(isinstance(a, entities.Account) for a in accounts)
        assert accounts[0].kind == entities.AccountKind.SYNTHETIC
        assert temp_db.get_account(sample_client.id, "04.2").report_category == "Despesas Administrativas"
        assert temp_db.get_account(sample_client.id, "99") is None

    def test_replace_accounts_last_duplicate_wins(self, temp_db, sample_client):
        accounts = [
            entities.Account(code="01", name="Primeiro", level=1),
            entities.Account(code="01", name="Segundo", level=1),
        ]
        assert temp_db.replace_accounts(sample_client.id, accounts) == 1
        assert temp_db.get_account(sample_client.id, "01").name == "Segundo"

    def test_replace_accounts_unknown_client(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.replace_accounts(42, [entities.Account(code="01", name="x", level=1)])

    def test_get_movements_returns_domain_models(self, temp_db, sample_client):
        """Movements keep import order and their twelve values."""
        movements = [
            make_movement("04.1", "Custos Das Vendas", monthly(-400)),
            make_movement("03.1", "Receita Bruta", monthly(1000)),
        ]
        temp_db.replace_movements(sample_client.id, 2024, StatementType.INCOME, movements)

        stored = temp_db.get_movements(sample_client.id, 2024, StatementType.INCOME)

        assert [m.account_code for m in stored] == ["04.1", "03.1"]
        assert all(isinstance(m, entities.Movement) for m in stored)
        assert stored[1].monthly_values == tuple([1000.0] * 12)
        assert stored[1].statement_type == StatementType.INCOME
        assert isinstance(stored[0].id, int)

    def test_replace_movements_is_scoped_to_period(self, temp_db, sample_client):
        """Replacing one period leaves the others untouched."""
        client_id = sample_client.id
        temp_db.replace_movements(client_id, 2024, StatementType.INCOME, [make_movement("03.1", "Receita Bruta")])
        temp_db.replace_movements(
            client_id, 2024, StatementType.BALANCE,
            [make_movement("01.1", "Disponivel", statement_type=StatementType.BALANCE)],
        )
        temp_db.replace_movements(client_id, 2023, StatementType.INCOME, [make_movement("03.1", "Receita Bruta")])

        temp_db.replace_movements(client_id, 2024, StatementType.INCOME, [make_movement("03.2", "Deduções")])

        assert [m.account_code for m in temp_db.get_movements(client_id, 2024, StatementType.INCOME)] == ["03.2"]
        assert len(temp_db.get_movements(client_id, 2024, StatementType.BALANCE)) == 1
        assert len(temp_db.get_movements(client_id, 2023, StatementType.INCOME)) == 1

    def test_replace_movements_in_batches(self, temp_db, sample_client):
        """More rows than one insert batch are all written."""
        movements = [make_movement(f"03.{i}", "Receita Bruta", [i]) for i in range(250)]
        assert temp_db.replace_movements(sample_client.id, 2024, StatementType.INCOME, movements) == 250
        assert temp_db.get_client_movement_count(sample_client.id) == 250

    def test_delete_movements_and_periods(self, temp_db, sample_client):
        client_id = sample_client.id
        temp_db.replace_movements(client_id, 2024, StatementType.INCOME, [make_movement("03.1", "Receita Bruta")])
        temp_db.replace_movements(
            client_id, 2024, StatementType.BALANCE,
            [make_movement("01.1", "Disponivel", statement_type=StatementType.BALANCE)],
        )

        periods = temp_db.list_movement_periods(client_id)
        assert periods == [(2024, StatementType.BALANCE, 1), (2024, StatementType.INCOME, 1)]

        assert temp_db.delete_movements(client_id, 2024, StatementType.INCOME) == 1
        assert temp_db.delete_movements(client_id, 2024) == 1
        assert temp_db.list_movement_periods(client_id) == []

    def test_category_mapping_updates_chart(self, temp_db, sample_client, sample_accounts):
        """Saving a mapping writes the category to the chart entry."""
        temp_db.replace_accounts(sample_client.id, sample_accounts)

        mapping_id = temp_db.upsert_category_mapping(sample_client.id, "04.3", "Fretes", "Despesas Comerciais")

        assert isinstance(mapping_id, int)
        account = temp_db.get_account(sample_client.id, "04.3")
        assert account.report_category == "Despesas Comerciais"
        assert account.is_mapped
        mappings = temp_db.list_category_mappings(sample_client.id)
        assert len(mappings) == 1
        assert isinstance(mappings[0], entities.CategoryMapping)

    def test_category_mapping_upsert_updates_in_place(self, temp_db, sample_client):
        first = temp_db.upsert_category_mapping(sample_client.id, "04.3", "Fretes", "Despesas Comerciais")
        second = temp_db.upsert_category_mapping(sample_client.id, "04.3", "Fretes", "Outras Despesas")

        assert first == second
        assert temp_db.list_category_mappings(sample_client.id)[0].category == "Outras Despesas"

    def test_category_mapping_creates_missing_account(self, temp_db, sample_client):
        temp_db.upsert_category_mapping(sample_client.id, "07.1.02", "Juros", "Despesas Financeiras")

        account = temp_db.get_account(sample_client.id, "07.1.02")
        assert account is not None
        assert account.level == 3
        assert account.kind == entities.AccountKind.ANALYTIC

    def test_mapping_survives_chart_reimport(self, temp_db, sample_client, sample_accounts):
        """A saved mapping overrides the category of a re-imported chart."""
        temp_db.replace_accounts(sample_client.id, sample_accounts)
        temp_db.upsert_category_mapping(sample_client.id, "04.2", "Aluguel", "Despesas Comerciais")

        temp_db.replace_accounts(sample_client.id, sample_accounts)

        assert temp_db.get_account(sample_client.id, "04.2").report_category == "Despesas Comerciais"

    def test_delete_category_mapping(self, temp_db, sample_client, sample_accounts):
        temp_db.replace_accounts(sample_client.id, sample_accounts)
        temp_db.upsert_category_mapping(sample_client.id, "04.2", "Aluguel", "Despesas Comerciais")

        assert temp_db.delete_category_mapping(sample_client.id, "04.2") is True
        assert temp_db.delete_category_mapping(sample_client.id, "04.2") is False
        account = temp_db.get_account(sample_client.id, "04.2")
        assert account.report_category is None
        assert not account.is_mapped

    def test_delete_client_blocked_then_forced(self, temp_db, sample_client, sample_accounts):
        temp_db.replace_accounts(sample_client.id, sample_accounts)

        with pytest.raises(ConflictError, match="6 accounts"):
            temp_db.delete_client(sample_client.id)

        temp_db.delete_client(sample_client.id, force=True)
        assert temp_db.get_client(sample_client.id) is None
        assert temp_db.get_client_account_count(sample_client.id) == 0


def test_factory_reads_environment(tmp_path, monkeypatch):
    """The database path falls back to the environment variable."""
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("CONTABIL_DB_PATH", str(db_path))

    db = create_sqlite_database()
    db.connect()
    db.initialize_schema()
    db.create_client(name="Env")
    db.disconnect()

    assert db_path.exists()
