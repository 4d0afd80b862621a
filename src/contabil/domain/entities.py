"""Domain model entities for contabil.

These are pure data classes representing business concepts, independent of
database schema. The calculation engine only ever sees these, so it runs the
same over rows loaded from storage and rows built in memory by a caller.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional

from contabil.domain.catalog import (
    BalanceGroup,
    CanonicalCategory,
    Polarity,
    StatementType,
)
from contabil.domain.hierarchy import code_of, field_of, infer_level
from contabil.domain.resolver import is_ref_sentinel, resolve
from contabil.utils.amount_parser import coerce_monthly_values


class AccountKind(str, Enum):
    """Chart-of-accounts entry kind."""

    ANALYTIC = "analytic"
    SYNTHETIC = "synthetic"

    @classmethod
    def from_type_code(cls, type_code: Optional[str]) -> "AccountKind":
        """Map the chart export TIPO column ("T" = totalizer) to a kind."""
        if type_code is not None and str(type_code).strip().upper() == "T":
            return cls.SYNTHETIC
        return cls.ANALYTIC


class LineRole(str, Enum):
    """Whether a statement line reads a category or is a formula result."""

    CATEGORY = "category"
    COMPUTED = "computed"


class HealthStatus(str, Enum):
    """Traffic-light status of a financial health indicator."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass(frozen=True)
class Client:
    """Business client whose books are being reported."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry."""

    code: str
    name: str
    level: int
    kind: AccountKind = AccountKind.ANALYTIC
    alias: Optional[str] = None
    report_type: Optional[str] = None
    report_category: Optional[str] = None
    id: Optional[int] = None

    @property
    def is_mapped(self) -> bool:
        return resolve(self.report_category) is not None


@dataclass(frozen=True)
class Movement:
    """Monthly balances of one account for one fiscal year and statement."""

    account_code: str
    name: str
    level: int
    statement_type: StatementType
    year: int
    category: Optional[str]
    monthly_values: tuple[float, ...]
    is_mapped: bool = False
    id: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "monthly_values", coerce_monthly_values(self.monthly_values))

    @property
    def code(self) -> str:
        return self.account_code

    @property
    def total(self) -> float:
        return sum(self.monthly_values)


@dataclass(frozen=True)
class ImportRow:
    """Canonical row shape produced by the file parsers.

    ``values`` is always normalized to twelve floats and a ``#REF`` category
    is stored as absent.
    """

    code: str
    name: str
    level: int = 0
    category: Optional[str] = None
    values: tuple[float, ...] = field(default_factory=tuple)

    def __post_init__(self):
        code = str(self.code or "").strip()
        category = self.category
        if category is not None:
            category = str(category).strip()
            if not category or is_ref_sentinel(category):
                category = None
        try:
            level = int(self.level or 0)
        except (TypeError, ValueError):
            level = 0
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "name", str(self.name or "").strip())
        object.__setattr__(self, "level", level if level > 0 else infer_level(code))
        object.__setattr__(self, "category", category)
        object.__setattr__(self, "values", coerce_monthly_values(self.values))

    def to_movement(self, statement_type: StatementType, year: int) -> Movement:
        """Build an unsaved Movement for a statement and year."""
        return Movement(
            account_code=self.code,
            name=self.name,
            level=self.level,
            statement_type=statement_type,
            year=year,
            category=self.category,
            monthly_values=self.values,
            is_mapped=self.category is not None,
        )


@dataclass(frozen=True)
class AccountImportRow:
    """Chart-of-accounts row produced by the file parsers."""

    code: str
    name: str
    level: int = 0
    type_code: Optional[str] = None
    alias: Optional[str] = None
    report_type: Optional[str] = None
    report_category: Optional[str] = None

    def to_account(self) -> Account:
        code = str(self.code).strip()
        try:
            level = int(self.level or 0)
        except (TypeError, ValueError):
            level = 0
        return Account(
            code=code,
            name=str(self.name).strip(),
            level=level if level > 0 else infer_level(code),
            kind=AccountKind.from_type_code(self.type_code),
            alias=_clean(self.alias),
            report_type=_clean(self.report_type),
            report_category=_clean(self.report_category),
        )


@dataclass(frozen=True)
class CategoryMapping:
    """Persisted account code to canonical category assignment."""

    id: int
    client_id: int
    account_code: str
    account_name: str
    category: str
    updated_at: datetime


@dataclass(frozen=True)
class StatementLine:
    """One line of a statement's fixed layout."""

    id: str
    label: str
    role: LineRole
    polarity: Polarity = Polarity.POSITIVE
    category: Optional[CanonicalCategory] = None
    style: str = "detail"


@dataclass(frozen=True)
class LineResult:
    """Evaluated statement line."""

    line: StatementLine
    value: float
    accumulated: float
    percent_of_revenue: float

    @property
    def id(self) -> str:
        return self.line.id


@dataclass(frozen=True)
class IncomeStatement:
    """Income Statement (DRE) for one month with year-to-date figures."""

    month: int
    lines: tuple[LineResult, ...]
    unmapped_count: int = 0

    def get(self, line_id: str) -> Optional[LineResult]:
        for result in self.lines:
            if result.line.id == line_id:
                return result
        return None

    def value(self, line_id: str) -> float:
        result = self.get(line_id)
        return result.value if result is not None else 0.0

    def accumulated(self, line_id: str) -> float:
        result = self.get(line_id)
        return result.accumulated if result is not None else 0.0

    def as_dict(self) -> dict[str, dict[str, float]]:
        return {
            r.line.id: {
                "value": r.value,
                "accumulated": r.accumulated,
                "percent_of_revenue": r.percent_of_revenue,
            }
            for r in self.lines
        }


@dataclass(frozen=True)
class HealthIndicator:
    """Key ratio with its traffic-light status."""

    name: str
    label: str
    value: float
    status: HealthStatus


@dataclass(frozen=True)
class BalanceSheet:
    """Balance Sheet group totals and ratios for one month."""

    month: int
    groups: dict[BalanceGroup, float]
    ratios: dict[str, float]
    indicators: tuple[HealthIndicator, ...] = ()
    unassigned_count: int = 0

    @property
    def total_assets(self) -> float:
        return self.groups[BalanceGroup.CURRENT_ASSETS] + self.groups[BalanceGroup.NON_CURRENT_ASSETS]

    @property
    def total_liabilities_and_equity(self) -> float:
        return (
            self.groups[BalanceGroup.CURRENT_LIABILITIES]
            + self.groups[BalanceGroup.NON_CURRENT_LIABILITIES]
            + self.groups[BalanceGroup.EQUITY]
        )

    @property
    def difference(self) -> float:
        """Assets minus liabilities and equity; informational only."""
        return self.total_assets - self.total_liabilities_and_equity

    def is_balanced(self, tolerance: float = 0.01) -> bool:
        return abs(self.difference) <= tolerance

    def as_dict(self) -> dict[str, Any]:
        return {
            "groups": {group.value: total for group, total in self.groups.items()},
            "total_assets": self.total_assets,
            "total_liabilities_and_equity": self.total_liabilities_and_equity,
            "difference": self.difference,
            "ratios": dict(self.ratios),
        }


@dataclass(frozen=True)
class DrillDownEntry:
    """Ledger row contributing to a statement line."""

    row: Any
    values: tuple[float, ...]
    month_value: float

    @property
    def code(self) -> str:
        return code_of(self.row)

    @property
    def name(self) -> str:
        return str(field_of(self.row, "name") or "")

    @property
    def total(self) -> float:
        return sum(self.values)


@dataclass(frozen=True)
class UnmappedSummary:
    """Mapping coverage of a client's ledger rows."""

    total: int
    mapped: int
    unmapped: tuple[Any, ...]

    @property
    def unmapped_count(self) -> int:
        return len(self.unmapped)

    @property
    def mapping_percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.mapped / self.total * 100


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def movements_from_rows(
    rows: Iterable[ImportRow], statement_type: StatementType, year: int
) -> list[Movement]:
    """Build unsaved movements from import rows."""
    return [row.to_movement(statement_type, year) for row in rows]
