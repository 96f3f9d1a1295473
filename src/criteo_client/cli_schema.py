"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """One table column: a top-level ``key`` or an ``extractor``, then formatting."""

    header: str
    key: str | None = None
    extractor: ValueExtractor | None = None
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value = self.extractor(row) if self.extractor else row.get(self.key or "")
        if value is None:
            return ""
        return self.formatter(value) if self.formatter else str(value)


@dataclass(frozen=True)
class TableView:
    """Title, columns and row order of a list command's table."""

    title: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None


def _attr(name: str) -> ValueExtractor:
    # Retail media rows keep their fields under "attributes".
    def _extractor(row: Row) -> Any:
        attributes = row.get("attributes")
        if isinstance(attributes, Mapping):
            return attributes.get(name)
        return None

    return _extractor


def _money_formatter(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:,.2f}"
    return str(value)


def _list_formatter(*, max_chars: int = 24, sep: str = ", ") -> ValueFormatter:
    def _formatter(value: Any) -> str:
        if isinstance(value, (list, tuple)):
            s = sep.join(str(v) for v in value)
        else:
            s = str(value)
        return s if len(s) <= max_chars else s[: max_chars - 1] + "…"

    return _formatter


def _sort_name(row: Row) -> str:
    return str(_attr("name")(row) or "").lower()


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "accounts.list": TableView(
        title="Retail Media Accounts",
        columns=(
            Column("ID", key="id"),
            Column("Name", extractor=_attr("name")),
            Column("Type", extractor=_attr("type")),
            Column("Subtype", extractor=_attr("subtype")),
            Column("Countries", extractor=_attr("countries"), formatter=_list_formatter()),
            Column("Currency", extractor=_attr("currency"), justify="center"),
            Column("Time Zone", extractor=_attr("timeZone")),
        ),
        sort_key=_sort_name,
    ),
    "campaigns.list": TableView(
        title="Campaigns",
        columns=(
            Column("ID", key="id"),
            Column("Name", extractor=_attr("name")),
            Column("Status", extractor=_attr("status"), justify="center"),
            Column("Type", extractor=_attr("type")),
            Column("Budget", extractor=_attr("budget"), formatter=_money_formatter, justify="right"),
            Column(
                "Spent",
                extractor=_attr("budgetSpent"),
                formatter=_money_formatter,
                justify="right",
            ),
            Column("Updated", extractor=_attr("updatedAt")),
        ),
        sort_key=_sort_name,
    ),
    "line-items.list": TableView(
        title="Line Items",
        columns=(
            Column("ID", key="id"),
            Column("Name", extractor=_attr("name")),
            Column("Status", extractor=_attr("status"), justify="center"),
            Column("Retailer", extractor=_attr("targetRetailerId")),
            Column("Start", extractor=_attr("startDate")),
            Column("End", extractor=_attr("endDate")),
            Column("Budget", extractor=_attr("budget"), formatter=_money_formatter, justify="right"),
            Column("Bid", extractor=_attr("targetBid"), formatter=_money_formatter, justify="right"),
        ),
        sort_key=_sort_name,
    ),
}
