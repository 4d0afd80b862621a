"""Integration tests running the CLI end to end."""

import pytest

from contabil.cli.main import cli


@pytest.fixture
def run(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def invoke(*args):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])

    return invoke


@pytest.fixture
def imported_client(run, fixtures_dir):
    """A client with its chart, an income ledger and a balance export."""
    assert run("client", "create", "Padaria Central").exit_code == 0
    assert run("accounts", "import", "Padaria Central", str(fixtures_dir / "plano_de_contas.csv")).exit_code == 0
    assert run(
        "movements", "import", "Padaria Central", str(fixtures_dir / "balancete_dre.csv"),
        "--year", "2024", "--type", "dre",
    ).exit_code == 0
    assert run(
        "movements", "import", "Padaria Central", str(fixtures_dir / "patrimonial.csv"),
        "--year", "2024", "--type", "patrimonial",
    ).exit_code == 0
    return "Padaria Central"


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "report" in result.output


def test_accounts_import_and_list(run, fixtures_dir):
    run("client", "create", "Padaria Central")

    result = run("accounts", "import", "Padaria Central", str(fixtures_dir / "plano_de_contas.csv"))
    assert result.exit_code == 0
    assert "Imported 6 accounts" in result.output
    assert "1 analytic accounts have no report category" in result.output

    result = run("accounts", "list", "Padaria Central")
    assert result.exit_code == 0
    assert "Vendas de mercadorias" in result.output
    assert "synthetic" in result.output

    result = run("accounts", "list", "Padaria Central", "--unmapped")
    assert "04.3" in result.output
    assert "04.1" not in result.output

    result = run("accounts", "stats", "Padaria Central")
    assert "Coverage: 75.0%" in result.output


def test_movements_import_reports_unknown_categories(run, fixtures_dir):
    run("client", "create", "Padaria Central")

    result = run(
        "movements", "import", "Padaria Central", str(fixtures_dir / "balancete_dre.csv"),
        "--year", "2024", "--type", "income",
    )
    assert result.exit_code == 0
    assert "Imported 7 rows for 2024 (coded layout)" in result.output
    assert "Categoria Inventada" in result.output


def test_movements_list_and_delete(run, imported_client):
    result = run("movements", "list", imported_client)
    assert result.exit_code == 0
    assert "income" in result.output
    assert "balance" in result.output

    result = run("movements", "list", imported_client, "--year", "2024", "--type", "income")
    assert "Vendas de mercadorias" in result.output

    result = run("movements", "delete", imported_client, "--year", "2024", "--type", "balance")
    assert result.exit_code == 0
    assert "Deleted 12 rows" in result.output


def test_movements_import_invalid_year(run, fixtures_dir):
    run("client", "create", "Padaria Central")
    result = run(
        "movements", "import", "Padaria Central", str(fixtures_dir / "balancete_dre.csv"),
        "--year", "24", "--type", "income",
    )
    assert result.exit_code == 1
    assert "Year must be between" in result.output


def test_report_income(run, imported_client):
    result = run("report", "income", imported_client, "--year", "2024", "--month", "2")

    assert result.exit_code == 0
    assert "Demonstração do Resultado" in result.output
    assert "Receita Líquida" in result.output
    assert "R$ 1.000,00" in result.output
    assert "Crescimento da receita bruta: 0,0%" in result.output


def test_report_income_invalid_month(run, imported_client):
    result = run("report", "income", imported_client, "--year", "2024", "--month", "13")
    assert result.exit_code != 0


def test_report_monthly(run, imported_client):
    result = run("report", "monthly", imported_client, "--year", "2024")
    assert result.exit_code == 0
    assert "Dez" in result.output
    assert "1.200,00" in result.output


def test_report_balance(run, imported_client):
    result = run("report", "balance", imported_client, "--year", "2024", "--month", "12")

    assert result.exit_code == 0
    assert "Ativo Circulante" in result.output
    assert "R$ 2.000,00" in result.output
    assert "Liquidez Corrente" in result.output
    assert "Diferença" not in result.output


def test_report_drill_line(run, imported_client):
    result = run(
        "report", "drill", imported_client, "--year", "2024", "--month", "1", "--line", "gross_revenue"
    )
    assert result.exit_code == 0
    assert "03.1" in result.output
    assert "TOTAL" in result.output


def test_report_drill_group(run, imported_client):
    result = run(
        "report", "drill", imported_client, "--year", "2024", "--month", "1", "--group", "current-assets"
    )
    assert result.exit_code == 0
    assert "Caixa e bancos" in result.output
    assert "Clientes" in result.output


def test_report_drill_computed_line(run, imported_client):
    result = run("report", "drill", imported_client, "--year", "2024", "--month", "1", "--line", "ebitda")
    assert result.exit_code == 0
    assert "No rows found." in result.output


def test_report_drill_unknown_line(run, imported_client):
    result = run("report", "drill", imported_client, "--year", "2024", "--month", "1", "--line", "lucro")
    assert result.exit_code == 1
    assert "Statement line 'lucro' not found" in result.output


def test_report_drill_requires_one_target(run, imported_client):
    result = run("report", "drill", imported_client, "--year", "2024", "--month", "1")
    assert result.exit_code == 1
    assert "exactly one of --line or --group" in result.output


def test_mapping_commands(run, imported_client):
    result = run("mapping", "set", imported_client, "04.3", "Despesas Comerciais")
    assert result.exit_code == 0
    assert "Mapped 04.3 to 'Despesas Comerciais'" in result.output

    result = run("mapping", "list", imported_client)
    assert "Fretes" in result.output

    result = run("mapping", "unmapped", imported_client, "--year", "2024", "--type", "income")
    assert result.exit_code == 0
    assert "Mapped 5 of 6" in result.output
    assert "04.4" in result.output

    result = run("mapping", "remove", imported_client, "04.3")
    assert result.exit_code == 0
    result = run("mapping", "remove", imported_client, "04.3")
    assert result.exit_code == 1
    assert "No mapping found" in result.output


def test_mapping_set_rejects_alias(run, imported_client):
    result = run("mapping", "set", imported_client, "04.3", "despesas comerciais")
    assert result.exit_code == 1
    assert "Invalid category" in result.output


def test_categories_commands(run):
    result = run("categories", "list", "--type", "balance")
    assert result.exit_code == 0
    assert "Fornecedores" in result.output
    assert "Receita Bruta" not in result.output

    result = run("categories", "resolve", "CMV")
    assert result.output.strip() == "Custos Das Vendas"

    result = run("categories", "resolve", "#REF!")
    assert result.output.strip() == "Unmapped"
