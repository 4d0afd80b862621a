"""Tests for category label resolution."""

import pytest

from contabil.domain.catalog import (
    BalanceGroup,
    CanonicalCategory,
    Polarity,
    StatementType,
    canonical_names,
    categories_for,
    group_category,
)
from contabil.domain.errors import InvalidCategoryError
from contabil.domain.resolver import (
    aliases_of,
    is_ref_sentinel,
    is_valid_canonical,
    normalize_label,
    repair_mojibake,
    require_canonical,
    resolve,
)


def test_resolve_canonical_names():
    """Every canonical name resolves to itself."""
    for category in CanonicalCategory:
        assert resolve(category.value) == category


def test_resolve_is_case_and_accent_insensitive():
    """Aliases match regardless of case, accents and spacing."""
    assert resolve("DEDUÇÕES") == CanonicalCategory.DEDUCTIONS
    assert resolve("deducoes") == CanonicalCategory.DEDUCTIONS
    assert resolve("  custo   das vendas ") == CanonicalCategory.COST_OF_SALES
    assert resolve("Despesas Tributárias") == CanonicalCategory.TAX_EXPENSES


def test_resolve_known_aliases():
    """Common ledger labels resolve to their canonical category."""
    assert resolve("CMV") == CanonicalCategory.COST_OF_SALES
    assert resolve("Devoluções") == CanonicalCategory.DEDUCTIONS
    assert resolve("Caixa") == CanonicalCategory.CASH
    assert resolve("ATIVO NÃO CIRCULANTE") == CanonicalCategory.NON_CURRENT_ASSETS
    assert resolve("Equivalência Patrimonial") == CanonicalCategory.EQUITY_METHOD_RESULT


def test_resolve_repairs_mojibake():
    """UTF-8 text decoded as Latin-1 still resolves."""
    assert resolve("DeduÃ§Ãµes") == CanonicalCategory.DEDUCTIONS
    assert repair_mojibake("DeduÃ§Ãµes") == "Deduções"


def test_repair_mojibake_leaves_clean_text_alone():
    """Text that is not mojibake comes back unchanged."""
    assert repair_mojibake("Deduções") == "Deduções"
    assert repair_mojibake("Receita Bruta") == "Receita Bruta"


@pytest.mark.parametrize("raw", [None, "", "   ", "#REF!", "#ref", 42, "Categoria Inventada"])
def test_resolve_unmapped_values(raw):
    """Blank, non-string, sentinel and unknown labels resolve to None."""
    assert resolve(raw) is None


def test_resolve_is_idempotent():
    """Resolving the canonical name of a result gives the same result."""
    for label in ["cmv", "DEDUCOES", "Clientes", "juros"]:
        category = resolve(label)
        assert resolve(category.value) == category
        assert resolve(category) == category


def test_is_ref_sentinel():
    """Only broken spreadsheet references are sentinels."""
    assert is_ref_sentinel("#REF!")
    assert is_ref_sentinel(" #ref ")
    assert not is_ref_sentinel("Receita Bruta")
    assert not is_ref_sentinel(None)


def test_normalize_label():
    """Normalization strips accents, folds case and collapses spaces."""
    assert normalize_label("  Patrimônio   LÍQUIDO ") == "patrimonio liquido"


def test_is_valid_canonical_is_strict():
    """Only exact canonical names are valid for writes."""
    assert is_valid_canonical("Despesas Administrativas")
    assert is_valid_canonical(CanonicalCategory.CASH)
    assert not is_valid_canonical("despesas administrativas")
    assert not is_valid_canonical("CMV")
    assert not is_valid_canonical(None)


def test_require_canonical():
    """require_canonical returns the member or raises."""
    assert require_canonical(" Receita Bruta ") == CanonicalCategory.REVENUE_GROSS

    with pytest.raises(InvalidCategoryError) as exc_info:
        require_canonical("cmv")
    assert exc_info.value.name == "cmv"
    assert "Invalid category 'cmv'" in str(exc_info.value)


def test_invalid_category_error_is_value_error():
    """Callers catching ValueError also catch invalid categories."""
    with pytest.raises(ValueError):
        require_canonical("Nada")


def test_aliases_of_includes_canonical_name():
    """The normalized canonical name is listed among the aliases."""
    aliases = aliases_of(CanonicalCategory.COST_OF_SALES)
    assert "custos das vendas" in aliases
    assert "cmv" in aliases


def test_catalog_polarity_and_groups():
    """Categories carry their statement, polarity and balance group."""
    assert CanonicalCategory.REVENUE_GROSS.statement_type == StatementType.INCOME
    assert CanonicalCategory.REVENUE_GROSS.polarity == Polarity.POSITIVE
    assert CanonicalCategory.DEDUCTIONS.polarity == Polarity.NEGATIVE
    assert CanonicalCategory.CASH.statement_type == StatementType.BALANCE
    assert CanonicalCategory.CASH.balance_group == BalanceGroup.CURRENT_ASSETS
    assert CanonicalCategory.SUPPLIERS.polarity == Polarity.NEGATIVE
    assert CanonicalCategory.ADMIN_EXPENSES.balance_group is None
    assert CanonicalCategory.EQUITY.is_group
    assert not CanonicalCategory.CASH.is_group


def test_catalog_helpers():
    """Helpers list names and categories per statement."""
    names = canonical_names()
    assert names[0] == "Receita Bruta"
    assert len(names) == len(set(names))
    assert all(c.statement_type == StatementType.INCOME for c in categories_for(StatementType.INCOME))
    assert group_category(BalanceGroup.EQUITY) == CanonicalCategory.EQUITY


def test_statement_type_parse():
    """Ledger export names are accepted for statement types."""
    assert StatementType.parse("dre") == StatementType.INCOME
    assert StatementType.parse("PATRIMONIAL") == StatementType.BALANCE
    assert StatementType.parse("balance") == StatementType.BALANCE
    with pytest.raises(ValueError, match="Unknown statement type"):
        StatementType.parse("cashflow")
