"""Canonical report categories and their alias table.

Every category label that reaches the engine, whether typed by an accountant
in the chart of accounts or exported by the bookkeeping software into a
ledger file, is normalized toward one member of ``CanonicalCategory``.
The enum value is the name persisted by mapping writes.

This module is the single source of the taxonomy. Anything that needs to know
which categories exist, how they are signed or which balance group they roll
into must read it from here.
"""

from enum import Enum
from typing import Optional


class StatementType(str, Enum):
    """Statement a movement set belongs to."""

    INCOME = "income"
    BALANCE = "balance"

    @classmethod
    def parse(cls, value: "str | StatementType") -> "StatementType":
        """Parse a statement type, accepting the ledger export names.

        Raises:
            ValueError: If the value is not a known statement type
        """
        if isinstance(value, StatementType):
            return value
        key = str(value).strip().lower()
        aliases = {"dre": cls.INCOME, "patrimonial": cls.BALANCE}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unknown statement type '{value}' (expected income, balance, dre or patrimonial)"
            )


class Polarity(str, Enum):
    """Declared sign convention of a category or statement line."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


class BalanceGroup(str, Enum):
    """The five Balance Sheet groups, valued by their report label."""

    CURRENT_ASSETS = "Ativo Circulante"
    NON_CURRENT_ASSETS = "Ativo Não Circulante"
    CURRENT_LIABILITIES = "Passivo Circulante"
    NON_CURRENT_LIABILITIES = "Passivo Não Circulante"
    EQUITY = "Patrimônio Líquido"

    @property
    def is_asset(self) -> bool:
        return self in (BalanceGroup.CURRENT_ASSETS, BalanceGroup.NON_CURRENT_ASSETS)


class CanonicalCategory(str, Enum):
    """Closed report taxonomy. Values are the canonical stored names."""

    # Income statement
    REVENUE_GROSS = "Receita Bruta"
    DEDUCTIONS = "Deduções"
    COST_OF_SALES = "Custos Das Vendas"
    COST_OF_SERVICES = "Custos Dos Serviços"
    ADMIN_EXPENSES = "Despesas Administrativas"
    SALES_EXPENSES = "Despesas Comerciais"
    TAX_EXPENSES = "Despesas Tributarias"
    OTHER_EXPENSES = "Outras Despesas"
    EQUITY_METHOD_RESULT = "Resultado Participações Societárias"
    OTHER_REVENUE = "Outras Receitas"
    FINANCIAL_REVENUE = "Receitas Financeiras"
    FINANCIAL_EXPENSES = "Despesas Financeiras"
    INCOME_TAX = "Irpj E Csll"
    DEPRECIATION = "Depreciação e Amortização"

    # Balance sheet: assets
    CASH = "Disponivel"
    RECEIVABLES = "Clientes"
    INVENTORY = "Estoques"
    ADVANCES = "Adiantamentos"
    PREPAID_EXPENSES = "Despesas Antecipadas"
    RECOVERABLE_TAXES = "Tributos A CompensarCP"
    OTHER_RECEIVABLES_LT = "Outras Contas A Receber Lp"
    FIXED_ASSETS = "Imobilizado"
    INTANGIBLE_ASSETS = "Intangivel"

    # Balance sheet: liabilities
    SUPPLIERS = "Fornecedores"
    ACCOUNTS_PAYABLE = "Contas A Pagar Cp"
    LOANS_ST = "Emprestimos E Financiamentos Cp"
    LABOR_OBLIGATIONS = "Obrigacoes Trabalhistas"
    TAX_OBLIGATIONS = "Obrigacoes Tributarias"
    INSTALLMENTS_ST = "Parcelamentos Cp"
    INSTALLMENTS_LT = "Parcelamentos Lp"
    OTHER_PAYABLES_LT = "Outras Contas A Pagar Lp"
    LEGAL_CONTINGENCIES = "Processos Judiciais"

    # Balance sheet: equity
    PROFIT_RESERVES = "Reserva De Lucros"
    RESULT_FOR_THE_YEAR = "Resultado Do Exercicio"

    # Balance sheet group labels, used directly by grouped exports
    CURRENT_ASSETS = "Ativo Circulante"
    NON_CURRENT_ASSETS = "Ativo Não Circulante"
    CURRENT_LIABILITIES = "Passivo Circulante"
    NON_CURRENT_LIABILITIES = "Passivo Não Circulante"
    EQUITY = "Patrimônio Líquido"

    @property
    def statement_type(self) -> StatementType:
        return _STATEMENT_TYPES[self]

    @property
    def polarity(self) -> Polarity:
        return _POLARITIES[self]

    @property
    def balance_group(self) -> Optional[BalanceGroup]:
        return _BALANCE_GROUPS.get(self)

    @property
    def is_group(self) -> bool:
        """Whether this category is itself one of the balance group labels."""
        return self.name in BalanceGroup.__members__


_INCOME_POLARITIES = {
    CanonicalCategory.REVENUE_GROSS: Polarity.POSITIVE,
    CanonicalCategory.DEDUCTIONS: Polarity.NEGATIVE,
    CanonicalCategory.COST_OF_SALES: Polarity.NEGATIVE,
    CanonicalCategory.COST_OF_SERVICES: Polarity.NEGATIVE,
    CanonicalCategory.ADMIN_EXPENSES: Polarity.NEGATIVE,
    CanonicalCategory.SALES_EXPENSES: Polarity.NEGATIVE,
    CanonicalCategory.TAX_EXPENSES: Polarity.NEGATIVE,
    CanonicalCategory.OTHER_EXPENSES: Polarity.NEGATIVE,
    CanonicalCategory.EQUITY_METHOD_RESULT: Polarity.POSITIVE,
    CanonicalCategory.OTHER_REVENUE: Polarity.POSITIVE,
    CanonicalCategory.FINANCIAL_REVENUE: Polarity.POSITIVE,
    CanonicalCategory.FINANCIAL_EXPENSES: Polarity.NEGATIVE,
    CanonicalCategory.INCOME_TAX: Polarity.NEGATIVE,
    CanonicalCategory.DEPRECIATION: Polarity.NEGATIVE,
}

_BALANCE_GROUPS = {
    CanonicalCategory.CASH: BalanceGroup.CURRENT_ASSETS,
    CanonicalCategory.RECEIVABLES: BalanceGroup.CURRENT_ASSETS,
    CanonicalCategory.INVENTORY: BalanceGroup.CURRENT_ASSETS,
    CanonicalCategory.ADVANCES: BalanceGroup.CURRENT_ASSETS,
    CanonicalCategory.PREPAID_EXPENSES: BalanceGroup.CURRENT_ASSETS,
    CanonicalCategory.RECOVERABLE_TAXES: BalanceGroup.CURRENT_ASSETS,
    CanonicalCategory.OTHER_RECEIVABLES_LT: BalanceGroup.NON_CURRENT_ASSETS,
    CanonicalCategory.FIXED_ASSETS: BalanceGroup.NON_CURRENT_ASSETS,
    CanonicalCategory.INTANGIBLE_ASSETS: BalanceGroup.NON_CURRENT_ASSETS,
    CanonicalCategory.SUPPLIERS: BalanceGroup.CURRENT_LIABILITIES,
    CanonicalCategory.ACCOUNTS_PAYABLE: BalanceGroup.CURRENT_LIABILITIES,
    CanonicalCategory.LOANS_ST: BalanceGroup.CURRENT_LIABILITIES,
    CanonicalCategory.LABOR_OBLIGATIONS: BalanceGroup.CURRENT_LIABILITIES,
    CanonicalCategory.TAX_OBLIGATIONS: BalanceGroup.CURRENT_LIABILITIES,
    CanonicalCategory.INSTALLMENTS_ST: BalanceGroup.CURRENT_LIABILITIES,
    CanonicalCategory.INSTALLMENTS_LT: BalanceGroup.NON_CURRENT_LIABILITIES,
    CanonicalCategory.OTHER_PAYABLES_LT: BalanceGroup.NON_CURRENT_LIABILITIES,
    CanonicalCategory.LEGAL_CONTINGENCIES: BalanceGroup.NON_CURRENT_LIABILITIES,
    CanonicalCategory.PROFIT_RESERVES: BalanceGroup.EQUITY,
    CanonicalCategory.RESULT_FOR_THE_YEAR: BalanceGroup.EQUITY,
    CanonicalCategory.CURRENT_ASSETS: BalanceGroup.CURRENT_ASSETS,
    CanonicalCategory.NON_CURRENT_ASSETS: BalanceGroup.NON_CURRENT_ASSETS,
    CanonicalCategory.CURRENT_LIABILITIES: BalanceGroup.CURRENT_LIABILITIES,
    CanonicalCategory.NON_CURRENT_LIABILITIES: BalanceGroup.NON_CURRENT_LIABILITIES,
    CanonicalCategory.EQUITY: BalanceGroup.EQUITY,
}

_STATEMENT_TYPES = {
    category: (
        StatementType.INCOME
        if category in _INCOME_POLARITIES
        else StatementType.BALANCE
    )
    for category in CanonicalCategory
}

_POLARITIES = dict(_INCOME_POLARITIES)
for _category, _group in _BALANCE_GROUPS.items():
    _POLARITIES[_category] = Polarity.POSITIVE if _group.is_asset else Polarity.NEGATIVE


# Alias keys are already normalized: accent-free, case-folded, single-spaced.
# Canonical names are added as their own aliases by the resolver.
CATEGORY_ALIASES: dict[str, CanonicalCategory] = {
    # Receitas
    "receita bruta": CanonicalCategory.REVENUE_GROSS,
    "receitas bruta": CanonicalCategory.REVENUE_GROSS,
    "receita de vendas": CanonicalCategory.REVENUE_GROSS,
    "receitas de vendas": CanonicalCategory.REVENUE_GROSS,
    # Deducoes
    "deducoes": CanonicalCategory.DEDUCTIONS,
    "deducao": CanonicalCategory.DEDUCTIONS,
    "deducoes de vendas": CanonicalCategory.DEDUCTIONS,
    "deducao de vendas": CanonicalCategory.DEDUCTIONS,
    "devolucoes": CanonicalCategory.DEDUCTIONS,
    "devolucao": CanonicalCategory.DEDUCTIONS,
    # Custos
    "custos das vendas": CanonicalCategory.COST_OF_SALES,
    "custos da vendas": CanonicalCategory.COST_OF_SALES,
    "custo das vendas": CanonicalCategory.COST_OF_SALES,
    "custo da vendas": CanonicalCategory.COST_OF_SALES,
    "custo de mercadoria vendida": CanonicalCategory.COST_OF_SALES,
    "cmv": CanonicalCategory.COST_OF_SALES,
    "custos dos servicos": CanonicalCategory.COST_OF_SERVICES,
    "custos de servicos": CanonicalCategory.COST_OF_SERVICES,
    "custo dos servicos": CanonicalCategory.COST_OF_SERVICES,
    "custo dos servicos prestados": CanonicalCategory.COST_OF_SERVICES,
    "csp": CanonicalCategory.COST_OF_SERVICES,
    # Despesas operacionais
    "despesas administrativas": CanonicalCategory.ADMIN_EXPENSES,
    "despesa administrativa": CanonicalCategory.ADMIN_EXPENSES,
    "despesas admin": CanonicalCategory.ADMIN_EXPENSES,
    "despesas comerciais": CanonicalCategory.SALES_EXPENSES,
    "despesa comercial": CanonicalCategory.SALES_EXPENSES,
    "despesas de vendas": CanonicalCategory.SALES_EXPENSES,
    "despesas tributarias": CanonicalCategory.TAX_EXPENSES,
    "despesa tributaria": CanonicalCategory.TAX_EXPENSES,
    "outras despesas": CanonicalCategory.OTHER_EXPENSES,
    "outra despesa": CanonicalCategory.OTHER_EXPENSES,
    "despesas diversas": CanonicalCategory.OTHER_EXPENSES,
    "despesa diversa": CanonicalCategory.OTHER_EXPENSES,
    # Participacoes societarias
    "resultado participacoes societarias": CanonicalCategory.EQUITY_METHOD_RESULT,
    "resultado de participacoes societarias": CanonicalCategory.EQUITY_METHOD_RESULT,
    "participacoes societarias": CanonicalCategory.EQUITY_METHOD_RESULT,
    "equivalencia patrimonial": CanonicalCategory.EQUITY_METHOD_RESULT,
    # Outras receitas e resultado financeiro
    "outras receitas": CanonicalCategory.OTHER_REVENUE,
    "outra receita": CanonicalCategory.OTHER_REVENUE,
    "receitas financeiras": CanonicalCategory.FINANCIAL_REVENUE,
    "receita financeira": CanonicalCategory.FINANCIAL_REVENUE,
    "rendimentos": CanonicalCategory.FINANCIAL_REVENUE,
    "despesas financeiras": CanonicalCategory.FINANCIAL_EXPENSES,
    "despesa financeira": CanonicalCategory.FINANCIAL_EXPENSES,
    "juros": CanonicalCategory.FINANCIAL_EXPENSES,
    # IRPJ e CSLL
    "irpj e csll": CanonicalCategory.INCOME_TAX,
    "imposto de renda": CanonicalCategory.INCOME_TAX,
    "contribuicao social": CanonicalCategory.INCOME_TAX,
    # Depreciacao
    "depreciacao e amortizacao": CanonicalCategory.DEPRECIATION,
    "depreciacoes": CanonicalCategory.DEPRECIATION,
    "amortizacoes": CanonicalCategory.DEPRECIATION,
    "depreciacao": CanonicalCategory.DEPRECIATION,
    "amortizacao": CanonicalCategory.DEPRECIATION,
    # Ativo
    "disponivel": CanonicalCategory.CASH,
    "disponibilidades": CanonicalCategory.CASH,
    "caixa": CanonicalCategory.CASH,
    "bancos": CanonicalCategory.CASH,
    "clientes": CanonicalCategory.RECEIVABLES,
    "contas a receber": CanonicalCategory.RECEIVABLES,
    "duplicatas a receber": CanonicalCategory.RECEIVABLES,
    "estoques": CanonicalCategory.INVENTORY,
    "estoque": CanonicalCategory.INVENTORY,
    "mercadorias": CanonicalCategory.INVENTORY,
    "adiantamentos": CanonicalCategory.ADVANCES,
    "adiantamento": CanonicalCategory.ADVANCES,
    "despesas antecipadas": CanonicalCategory.PREPAID_EXPENSES,
    "despesa antecipada": CanonicalCategory.PREPAID_EXPENSES,
    "tributos a compensarcp": CanonicalCategory.RECOVERABLE_TAXES,
    "tributos a compensar cp": CanonicalCategory.RECOVERABLE_TAXES,
    "tributos a compensar": CanonicalCategory.RECOVERABLE_TAXES,
    "outras contas a receber lp": CanonicalCategory.OTHER_RECEIVABLES_LT,
    "outras contas a receber longo prazo": CanonicalCategory.OTHER_RECEIVABLES_LT,
    "imobilizado": CanonicalCategory.FIXED_ASSETS,
    "ativo imobilizado": CanonicalCategory.FIXED_ASSETS,
    "bens e direitos": CanonicalCategory.FIXED_ASSETS,
    "intangivel": CanonicalCategory.INTANGIBLE_ASSETS,
    # Passivo
    "fornecedores": CanonicalCategory.SUPPLIERS,
    "contas a pagar": CanonicalCategory.SUPPLIERS,
    "contas a pagar cp": CanonicalCategory.ACCOUNTS_PAYABLE,
    "contas a pagar curto prazo": CanonicalCategory.ACCOUNTS_PAYABLE,
    "emprestimos e financiamentos cp": CanonicalCategory.LOANS_ST,
    "emprestimo e financiamento cp": CanonicalCategory.LOANS_ST,
    "emprestimos cp": CanonicalCategory.LOANS_ST,
    "obrigacoes trabalhistas": CanonicalCategory.LABOR_OBLIGATIONS,
    "salarios a pagar": CanonicalCategory.LABOR_OBLIGATIONS,
    "encargos trabalhistas": CanonicalCategory.LABOR_OBLIGATIONS,
    "obrigacoes tributarias": CanonicalCategory.TAX_OBLIGATIONS,
    "impostos a pagar": CanonicalCategory.TAX_OBLIGATIONS,
    "parcelamentos cp": CanonicalCategory.INSTALLMENTS_ST,
    "parcelamento cp": CanonicalCategory.INSTALLMENTS_ST,
    "parcelamentos lp": CanonicalCategory.INSTALLMENTS_LT,
    "parcelamento lp": CanonicalCategory.INSTALLMENTS_LT,
    "outras contas a pagar lp": CanonicalCategory.OTHER_PAYABLES_LT,
    "outras contas a pagar longo prazo": CanonicalCategory.OTHER_PAYABLES_LT,
    "processos judiciais": CanonicalCategory.LEGAL_CONTINGENCIES,
    "processo judicial": CanonicalCategory.LEGAL_CONTINGENCIES,
    "contingencias": CanonicalCategory.LEGAL_CONTINGENCIES,
    # Patrimonio liquido
    "reserva de lucros": CanonicalCategory.PROFIT_RESERVES,
    "reservas": CanonicalCategory.PROFIT_RESERVES,
    "resultado do exercicio": CanonicalCategory.RESULT_FOR_THE_YEAR,
    "lucro do exercicio": CanonicalCategory.RESULT_FOR_THE_YEAR,
    # Grupos do balanco
    "ativo circulante": CanonicalCategory.CURRENT_ASSETS,
    "ativo nao circulante": CanonicalCategory.NON_CURRENT_ASSETS,
    "realizavel a longo prazo": CanonicalCategory.NON_CURRENT_ASSETS,
    "passivo circulante": CanonicalCategory.CURRENT_LIABILITIES,
    "passivo nao circulante": CanonicalCategory.NON_CURRENT_LIABILITIES,
    "exigivel a longo prazo": CanonicalCategory.NON_CURRENT_LIABILITIES,
    "patrimonio liquido": CanonicalCategory.EQUITY,
}


def canonical_names() -> list[str]:
    """Return every canonical category name in taxonomy order."""
    return [category.value for category in CanonicalCategory]


def categories_for(statement_type: StatementType) -> list[CanonicalCategory]:
    """Return the categories that feed a statement type."""
    return [c for c in CanonicalCategory if c.statement_type == statement_type]


def group_category(group: BalanceGroup) -> CanonicalCategory:
    """Return the category whose value is the group's label."""
    return CanonicalCategory[group.name]
