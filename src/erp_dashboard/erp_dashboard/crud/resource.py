"""Declarative description of a CRUD screen.

A ``Resource`` names the table, the form fields, the table columns and the
search fields of one page. The generic repository, service and controller
are driven entirely by it.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional, Type

from ..common.sequence import NumberSpec
from ..common.table import Column, format_cell


def choices_of(enum_cls: Type[Enum]) -> tuple[tuple[str, str], ...]:
    return tuple((m.value, m.value.replace("_", " ").title()) for m in enum_cls)


def plain_choices(values) -> tuple[tuple[str, str], ...]:
    return tuple((v, v) for v in values)


def today() -> date:
    return date.today()


@dataclass(frozen=True)
class Field:
    name: str
    label: str
    kind: str = "text"
    required: bool = False
    choices: tuple[tuple[str, str], ...] = ()
    lookup: Optional[str] = None
    default: Any = None
    width: int = 6
    # blank numbers are stored as NULL instead of 0
    nullable: bool = False

    def initial(self) -> Any:
        return self.default() if callable(self.default) else self.default


@dataclass(frozen=True)
class Lookup:
    """Options for a foreign-key select; ``sql`` must return ``id`` and ``label``."""

    name: str
    sql: str


@dataclass(frozen=True)
class LineItems:
    """Child rows entered with the header, e.g. invoice lines.

    ``lookup`` lists the products and must also return ``rate`` and ``unit``.
    The header's ``total_column`` is the sum of the kept item amounts.
    """

    table: str
    parent_column: str
    product_column: str
    product_table: str
    lookup: Lookup
    product_label: str = "Product"
    total_column: str = "total_amount"
    min_items: int = 0


@dataclass(frozen=True)
class Stat:
    """One summary card above a list."""

    title: str
    value: Any
    kind: str = "number"
    icon: str = "bi-graph-up"
    css: str = ""

    @property
    def display(self) -> str:
        return format_cell({"value": self.value}, Column("value", self.title, self.kind))


@dataclass(frozen=True)
class Resource:
    name: str
    table: str
    section: str
    slug: str
    title: str
    singular: str
    fields: tuple[Field, ...]
    columns: tuple[Column, ...]
    search_fields: tuple[str, ...]
    order_by: str = "t.created_at DESC"
    select_extra: str = ""
    joins: str = ""
    lookups: tuple[Lookup, ...] = ()
    number: Optional[NumberSpec] = None
    compute: Optional[Callable[[dict], dict]] = None
    decorate: Optional[Callable[[dict], dict]] = None
    items: Optional[LineItems] = None
    # summary(rows, today, options) -> list[Stat], computed over all rows
    summary: Optional[Callable[..., list]] = None
    section_name: Optional[str] = None
    add_label: str = "Add New"
    empty_message: str = "No data found"
    search_placeholder: str = "Search..."

    @property
    def url_path(self) -> str:
        return f"/{self.section}/{self.slug}"

    @property
    def section_title(self) -> str:
        return self.section_name or self.section.replace("-", " ").title()

    @property
    def all_lookups(self) -> tuple[Lookup, ...]:
        if self.items:
            return self.lookups + (self.items.lookup,)
        return self.lookups

    def field(self, name: str) -> Field:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def lookup(self, name: str) -> Lookup:
        for lk in self.all_lookups:
            if lk.name == name:
                return lk
        raise KeyError(name)
