"""Text and JSON report generation for reward summaries."""
import json
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from rewardflow.rewards.aggregator import in_range, resolve_bound
from rewardflow.rewards.dates import parse_calendar_date
from rewardflow.rewards.models import Transaction, RewardSummary
from rewardflow.utils import get_logger, ValidationError

logger = get_logger()

# (key, label) per table, in display order
TRANSACTION_COLUMNS = [
    ("customerId", "Customer ID"),
    ("name", "Name"),
    ("date", "Date"),
    ("price", "Price"),
    ("rewardPoints", "Reward Points"),
]
USER_REWARD_COLUMNS = [
    ("year", "Year"),
    ("month", "Month"),
    ("customerId", "Customer ID"),
    ("name", "Name"),
    ("totalPoints", "Total Points"),
]
TOTAL_REWARD_COLUMNS = [
    ("name", "Name"),
    ("totalPoints", "Total Points"),
]

# (key, title, columns) in report order
TABLES = [
    ("transactions", "Transactions", TRANSACTION_COLUMNS),
    ("userRewards", "User Rewards (by Month)", USER_REWARD_COLUMNS),
    ("totalRewards", "Total Rewards", TOTAL_REWARD_COLUMNS),
]

SORT_ORDERS = ("asc", "desc")

# Column each table is sorted by when no sort column is requested
DEFAULT_SORT = {
    "transactions": "customerId",
    "userRewards": "year",
    "totalRewards": "name",
}


def _sort_key(value: Any) -> tuple:
    # Numbers before text, missing values last
    if value is None:
        return (2, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


def sort_rows(rows: Sequence[Dict[str, Any]], order_by: str, order: str = "asc") -> List[Dict[str, Any]]:
    """
    Stable sort of table rows by one column.

    Args:
        rows: Row dictionaries
        order_by: Column key to sort by
        order: "asc" or "desc"

    Returns:
        New sorted list; rows with equal keys keep their input order
    """
    if order not in SORT_ORDERS:
        raise ValidationError(f"Sort order must be one of {SORT_ORDERS}, got {order!r}")

    return sorted(
        rows,
        key=lambda row: _sort_key(row.get(order_by)),
        reverse=(order == "desc")
    )


def filter_totals(rows: Sequence[Dict[str, Any]], query: Optional[str]) -> List[Dict[str, Any]]:
    """
    Keep total rows matching a search query.

    A row matches when its name contains the query, ignoring case, or when
    its point total contains the query as a substring. An empty query
    keeps every row.
    """
    if not query:
        return list(rows)

    needle = query.lower()
    return [
        row for row in rows
        if needle in str(row.get("name", "")).lower() or query in str(row.get("totalPoints", ""))
    ]


def paginate(rows: Sequence[Dict[str, Any]], page: int, rows_per_page: int) -> List[Dict[str, Any]]:
    """Return the zero-based page of rows."""
    if rows_per_page < 1:
        raise ValidationError(f"Rows per page must be at least 1, got {rows_per_page}")
    if page < 0:
        raise ValidationError(f"Page must not be negative, got {page}")

    start_index = page * rows_per_page
    return list(rows[start_index:start_index + rows_per_page])


class ReportGenerator:
    """Renders transactions and reward summaries as tables."""

    def __init__(self, date_format: str = "%d/%m/%Y", rows_per_page: Optional[int] = None):
        """
        Initialize report generator.

        Args:
            date_format: strftime format for transaction dates
            rows_per_page: Page size, or None to show every row
        """
        self.date_format = date_format
        self.rows_per_page = rows_per_page

    def build_tables(
        self,
        transactions: Iterable[Transaction],
        summary: RewardSummary,
        start: Any = None,
        end: Any = None
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Build row dictionaries for the three report tables."""
        start_date = resolve_bound(start, "start")
        end_date = resolve_bound(end, "end")

        transaction_rows = []
        for txn in transactions:
            txn_date = parse_calendar_date(txn.date)
            if txn_date is None:
                continue
            if in_range(txn_date, start_date, end_date):
                transaction_rows.append(txn.to_dict())

        return {
            "transactions": transaction_rows,
            "userRewards": [reward.to_dict() for reward in summary.user_rewards],
            "totalRewards": [reward.to_dict() for reward in summary.total_rewards],
        }

    def prepare_tables(
        self,
        transactions: Iterable[Transaction],
        summary: RewardSummary,
        start: Any = None,
        end: Any = None,
        sort_by: Optional[str] = None,
        order: str = "asc",
        search: Optional[str] = None
    ) -> Dict[str, List[Dict[str, Any]]]:
        """
        Build the tables with search and sorting applied.

        Tables that have the sort_by column are sorted by it; the others,
        and every table when sort_by is None, use their DEFAULT_SORT column.
        The search query only filters the total rewards table.

        Raises:
            ValidationError: If sort_by is not a column of any table
        """
        if sort_by is not None and not any(
            sort_by == key for _, _, columns in TABLES for key, _ in columns
        ):
            raise ValidationError(f"Unknown sort column: {sort_by}")

        tables = self.build_tables(transactions, summary, start, end)
        tables["totalRewards"] = filter_totals(tables["totalRewards"], search)

        for table_key, _, columns in TABLES:
            if sort_by is not None and any(key == sort_by for key, _ in columns):
                tables[table_key] = sort_rows(tables[table_key], sort_by, order)
            else:
                tables[table_key] = sort_rows(tables[table_key], DEFAULT_SORT[table_key], order)

        return tables

    def render_text(
        self,
        transactions: Iterable[Transaction],
        summary: RewardSummary,
        start: Any = None,
        end: Any = None,
        sort_by: Optional[str] = None,
        order: str = "asc",
        page: int = 0,
        search: Optional[str] = None
    ) -> str:
        """
        Render the three tables as fixed-width text.

        Args:
            transactions: Transactions with reward points
            summary: Aggregation result for the same range
            start: First included day, or None
            end: Last included day, or None
            sort_by: Column key applied to every table that has it
            order: "asc" or "desc"
            page: Zero-based page shown when rows_per_page is set
            search: Query filtering the total rewards table

        Returns:
            Report text
        """
        self._check_page(page)
        tables = self.prepare_tables(transactions, summary, start, end, sort_by, order, search)

        lines = []
        for table_key, title, columns in TABLES:
            lines.extend(self._render_table(title, columns, tables[table_key], page))
            lines.append("")

        logger.debug("Rendered report with sort=%s order=%s page=%s search=%r", sort_by, order, page, search)
        return "\n".join(lines).rstrip() + "\n"

    def render_json(
        self,
        transactions: Iterable[Transaction],
        summary: RewardSummary,
        start: Any = None,
        end: Any = None,
        sort_by: Optional[str] = None,
        order: str = "asc",
        page: int = 0,
        search: Optional[str] = None
    ) -> str:
        """Render the three tables as a JSON document, paged like the text report."""
        self._check_page(page)
        tables = self.prepare_tables(transactions, summary, start, end, sort_by, order, search)
        if self.rows_per_page:
            tables = {
                table_key: paginate(rows, page, self.rows_per_page)
                for table_key, rows in tables.items()
            }
        return json.dumps(tables, ensure_ascii=False, indent=2, default=str)

    def _check_page(self, page: int) -> None:
        if page < 0:
            raise ValidationError(f"Page must not be negative, got {page}")
        if page and not self.rows_per_page:
            raise ValidationError(f"Page {page} requested without a page size")

    def _render_table(
        self,
        title: str,
        columns: List[Tuple[str, str]],
        rows: List[Dict[str, Any]],
        page: int
    ) -> List[str]:
        """Render one titled table, paginated when a page size is set."""
        total = len(rows)
        if self.rows_per_page:
            rows = paginate(rows, page, self.rows_per_page)

        cells = [[self._format_cell(key, row.get(key)) for key, _ in columns] for row in rows]
        widths = [
            max([len(label)] + [len(row_cells[i]) for row_cells in cells])
            for i, (_, label) in enumerate(columns)
        ]

        lines = [title, "=" * len(title)]
        lines.append("  ".join(label.ljust(widths[i]) for i, (_, label) in enumerate(columns)).rstrip())
        lines.append("  ".join("-" * width for width in widths))
        for row_cells in cells:
            lines.append("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row_cells)).rstrip())

        if not rows:
            lines.append("(no rows)")

        if self.rows_per_page and rows:
            first = page * self.rows_per_page + 1
            last = page * self.rows_per_page + len(rows)
            lines.append(f"Rows {first}-{last} of {total}")

        return lines

    def _format_cell(self, key: str, value: Any) -> str:
        """Format one cell value for display."""
        if value is None:
            return ""
        if key == "date":
            parsed = parse_calendar_date(value)
            if parsed is not None:
                return parsed.strftime(self.date_format)
        if key == "price" and isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value:.2f}"
        return str(value)
