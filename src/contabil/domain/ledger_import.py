"""Chart of accounts and ledger CSV import domain service."""

import csv
import re
from pathlib import Path
from typing import Any, Optional

from contabil.config.logging import get_logger
from contabil.database.base import Database
from contabil.domain.catalog import StatementType
from contabil.domain.chart import ChartOfAccountsService
from contabil.domain.entities import AccountImportRow, ImportRow
from contabil.domain.movement import MovementService
from contabil.domain.resolver import resolve
from contabil.utils.amount_parser import MONTHS_PER_YEAR, coerce_amount

logger = get_logger(__name__)

# Coded ledger ("balancete") columns
CODE_COLUMN = 0
NAME_COLUMN = 1
FIRST_MONTH_COLUMN = 2
LEVEL_COLUMN = 15
CATEGORY_COLUMN = 16

# Grouped balance export: label rows that open a group
BALANCE_GROUP_LABELS = (
    "ATIVO CIRCULANTE",
    "ATIVO NÃO CIRCULANTE",
    "PASSIVO CIRCULANTE",
    "PASSIVO NÃO CIRCULANTE",
    "PATRIMÔNIO LÍQUIDO",
    "TOTAL ATIVO",
    "TOTAL DO PASSIVO",
)

LAYOUT_CODED = "coded"
LAYOUT_GROUPED = "grouped"
LAYOUT_AUTO = "auto"
LAYOUTS = (LAYOUT_AUTO, LAYOUT_CODED, LAYOUT_GROUPED)

_STARTS_WITH_DIGIT = re.compile(r"^\d")


def _cell(row: list[str], index: int) -> str:
    if index < len(row) and row[index] is not None:
        return str(row[index]).strip()
    return ""


def _month_cells(row: list[str]) -> list[float]:
    return [coerce_amount(_cell(row, FIRST_MONTH_COLUMN + m)) for m in range(MONTHS_PER_YEAR)]


def _group_key(label: str) -> str:
    return " ".join(label.strip().upper().split())


def is_group_label(label: str) -> bool:
    """Return True for a grouped-export row that opens a balance group."""
    return _group_key(label) in BALANCE_GROUP_LABELS


def read_csv_rows(csv_file_path: str | Path) -> list[list[str]]:
    """Read every row of a CSV file as a list of cells.

    The delimiter (comma, semicolon or tab) is sniffed from the first
    kilobytes; a UTF-8 byte order mark is dropped.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        # Try to detect delimiter
        sample = f.read(4096)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
        except csv.Error:
            delimiter = ","
        return [row for row in csv.reader(f, delimiter=delimiter)]


def parse_chart_rows(rows: list[list[str]]) -> list[AccountImportRow]:
    """Parse chart-of-accounts rows.

    Columns: CLASSIFICADOR, NÍVEL, TIPO, DESCRIÇÃO, Apelido, Relatório,
    DESCRIÇÃO RELATÓRIO. The header row and any row whose code does not
    start with a digit are skipped.
    """
    accounts = []
    for row in rows[1:]:
        code = _cell(row, 0)
        if not code or not _STARTS_WITH_DIGIT.match(code):
            continue
        try:
            level = int(_cell(row, 1) or 0)
        except ValueError:
            level = 0
        accounts.append(
            AccountImportRow(
                code=code,
                name=_cell(row, 3) or _cell(row, 1),
                level=level,
                type_code=_cell(row, 2) or None,
                alias=_cell(row, 4) or None,
                report_type=_cell(row, 5) or None,
                report_category=_cell(row, 6) or None,
            )
        )
    return accounts


def parse_coded_ledger_rows(rows: list[list[str]]) -> list[ImportRow]:
    """Parse a coded ledger export.

    Columns: code, name, January..December, total (ignored), level,
    category. Rows whose code does not start with a digit are skipped.
    """
    parsed = []
    for row in rows:
        code = _cell(row, CODE_COLUMN)
        if not code or not _STARTS_WITH_DIGIT.match(code):
            continue
        try:
            level = int(_cell(row, LEVEL_COLUMN) or 0)
        except ValueError:
            level = 0
        parsed.append(
            ImportRow(
                code=code,
                name=_cell(row, NAME_COLUMN),
                level=level,
                category=_cell(row, CATEGORY_COLUMN) or None,
                values=_month_cells(row),
            )
        )
    return parsed


def parse_grouped_balance_rows(rows: list[list[str]]) -> list[ImportRow]:
    """Parse a Balance Sheet export that has labels but no account codes.

    Column 1 holds the label and columns 2-13 the monthly values. A group
    label row opens a group and is kept as that group's level 1 row; the
    rows that follow are level 2 rows of the group. Rows before the first
    group are skipped.
    """
    parsed = []
    current_group: Optional[str] = None
    for row in rows:
        label = _cell(row, NAME_COLUMN)
        if not label:
            continue
        values = _month_cells(row)
        if is_group_label(label):
            current_group = _group_key(label)
            parsed.append(ImportRow(code=current_group, name=label, level=1, category=current_group, values=values))
        elif current_group is not None:
            parsed.append(ImportRow(code=label, name=label, level=2, category=current_group, values=values))
    return parsed


def detect_layout(rows: list[list[str]]) -> str:
    """Tell a coded ledger from a grouped balance export."""
    for row in rows:
        if _STARTS_WITH_DIGIT.match(_cell(row, CODE_COLUMN)):
            return LAYOUT_CODED
    return LAYOUT_GROUPED


def unknown_categories(rows: list[ImportRow]) -> list[str]:
    """Return the distinct tagged categories that do not resolve, in file order."""
    seen: dict[str, None] = {}
    for row in rows:
        if row.category is not None and resolve(row.category) is None:
            seen.setdefault(row.category, None)
    return list(seen)


class LedgerImportService:
    """Service for importing chart-of-accounts and ledger files."""

    def __init__(self, db: Database):
        """Initialize ledger import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.chart_service = ChartOfAccountsService(db)
        self.movement_service = MovementService(db)

    def import_chart(self, client_id: int, csv_file_path: str | Path) -> dict[str, Any]:
        """Replace a client's chart of accounts from a CSV file.

        Returns:
            Dict with import statistics:
            - imported: number of accounts stored
            - unmapped: number of analytic accounts without a resolvable category

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValueError: If the file holds no account rows
        """
        accounts = parse_chart_rows(read_csv_rows(csv_file_path))
        if not accounts:
            raise ValueError(f"No accounts found in {csv_file_path}")

        imported = self.chart_service.replace_accounts(client_id, accounts)
        unmapped = self.chart_service.mapping_stats(client_id).unmapped_count
        return {"imported": imported, "unmapped": unmapped}

    def import_ledger(
        self,
        client_id: int,
        year: int,
        statement_type: StatementType | str,
        csv_file_path: str | Path,
        layout: str = LAYOUT_AUTO,
    ) -> dict[str, Any]:
        """Replace one period's movements from a ledger CSV file.

        Args:
            client_id: Client ID
            year: Fiscal year
            statement_type: income/balance (dre/patrimonial accepted)
            csv_file_path: Path to CSV file
            layout: "coded", "grouped" or "auto" to detect from the rows

        Returns:
            Dict with import statistics:
            - imported: number of movements stored
            - untagged: rows without a category tag
            - unknown_categories: tags that resolve to no canonical category

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValueError: If the layout is unknown or the file holds no rows
        """
        if layout not in LAYOUTS:
            raise ValueError(f"Unknown layout '{layout}' (expected one of: {', '.join(LAYOUTS)})")
        statement_type = StatementType.parse(statement_type)

        rows = read_csv_rows(csv_file_path)
        if layout == LAYOUT_AUTO:
            layout = detect_layout(rows)
        if layout == LAYOUT_CODED:
            parsed = parse_coded_ledger_rows(rows)
        else:
            parsed = parse_grouped_balance_rows(rows)
        if not parsed:
            raise ValueError(f"No ledger rows found in {csv_file_path}")

        imported = self.movement_service.replace_movements(client_id, year, statement_type, parsed)
        unknown = unknown_categories(parsed)
        if unknown:
            logger.info("unknown_categories", client_id=client_id, count=len(unknown), sample=unknown[:3])
        return {
            "imported": imported,
            "layout": layout,
            "untagged": sum(1 for row in parsed if row.category is None),
            "unknown_categories": unknown,
        }
