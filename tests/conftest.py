"""Shared pytest fixtures for contabil tests."""

import tempfile
import os
from pathlib import Path
import pytest

from contabil.database.factories import create_sqlite_database
from contabil.domain.catalog import StatementType
from contabil.domain.chart import ChartOfAccountsService
from contabil.domain.client import ClientService
from contabil.domain.entities import Account, AccountKind, ImportRow
from contabil.domain.mapping import MappingService
from contabil.domain.movement import MovementService
from contabil.domain.report import ReportService


def make_movement(code, category=None, values=(), name=None, statement_type=StatementType.INCOME, year=2024):
    """Build an unsaved Movement from a code, a category and monthly values."""
    return ImportRow(code=code, name=name or f"Conta {code}", category=category, values=values).to_movement(
        statement_type, year
    )


def monthly(value, months=12):
    """Return a vector with the same value in the first ``months`` months."""
    return [value] * months


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def chart_service(temp_db):
    """Create a ChartOfAccountsService with a temporary database."""
    return ChartOfAccountsService(temp_db)


@pytest.fixture
def movement_service(temp_db):
    """Create a MovementService with a temporary database."""
    return MovementService(temp_db)


@pytest.fixture
def mapping_service(temp_db):
    """Create a MappingService with a temporary database."""
    return MappingService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client for testing."""
    client_id = client_service.create_client(name="Padaria Central")
    return client_service.get_client(client_id)


@pytest.fixture
def sample_accounts():
    """A small chart of accounts with one synthetic parent per branch."""
    return [
        Account(code="03", name="RECEITAS", level=1, kind=AccountKind.SYNTHETIC),
        Account(code="03.1", name="Vendas de mercadorias", level=2, report_category="Receita Bruta"),
        Account(code="04", name="CUSTOS E DESPESAS", level=1, kind=AccountKind.SYNTHETIC),
        Account(code="04.1", name="CMV", level=2, report_category="Custos Das Vendas"),
        Account(code="04.2", name="Aluguel", level=2, report_category="Despesas Administrativas"),
        Account(code="04.3", name="Fretes", level=2),
    ]


@pytest.fixture
def sample_income_rows():
    """Income ledger rows: revenue 1000/month, costs 400, rent 100, freight untagged."""
    return [
        ImportRow(code="03", name="RECEITAS", level=1, category="Receita Bruta", values=monthly(1000)),
        ImportRow(code="03.1", name="Vendas de mercadorias", level=2, category="Receita Bruta", values=monthly(1000)),
        ImportRow(code="04.1", name="CMV", level=2, category="Custos Das Vendas", values=monthly(-400)),
        ImportRow(code="04.2", name="Aluguel", level=2, category=None, values=monthly(100)),
        ImportRow(code="04.3", name="Fretes", level=2, category="#REF!", values=monthly(50)),
    ]


@pytest.fixture
def loaded_client(sample_client, chart_service, movement_service, sample_accounts, sample_income_rows):
    """A client with a chart of accounts and one year of income movements."""
    chart_service.replace_accounts(sample_client.id, sample_accounts)
    movement_service.replace_movements(sample_client.id, 2024, StatementType.INCOME, sample_income_rows)
    return sample_client


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
