from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import format_display_time, parse_form_date, parse_form_time
from ..common.sequence import next_sequence_number, sequence_prefix
from ..common.table import filter_rows
from ..common.validators import optional_text, parse_amount, parse_optional_id
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import require_editor
from ..database.mysql_base import to_float
from .items import LineItemInput, items_total, parse_items
from .repository import CrudRepository
from .resource import Field, Resource, Stat

_FALSE_VALUES = {"", "0", "false", "off", "no"}


class CrudService:
    """Use case: list/search/create/update/delete rows of one resource."""

    def __init__(self, repo: CrudRepository, resource: Resource, *, clock: Callable[[], date] = date.today):
        self._repo = repo
        self._resource = resource
        self._clock = clock

    @property
    def resource(self) -> Resource:
        return self._resource

    def list_rows(self, search: Optional[str] = None) -> list[dict]:
        rows = [self._decorate(r) for r in self._repo.list_rows()]
        return filter_rows(rows, search, self._resource.search_fields)

    def get(self, row_id: int) -> dict:
        row = self._repo.get_by_id(row_id)
        if not row:
            raise NotFoundError(f"{self._resource.singular} not found")
        return self._decorate(row)

    def options(self) -> dict[str, list[dict]]:
        return {lk.name: list(self._repo.list_options(lk)) for lk in self._resource.all_lookups}

    def summary(self, rows: Sequence[dict], options: Optional[Mapping[str, list]] = None) -> list[Stat]:
        if not self._resource.summary:
            return []
        return self._resource.summary(rows, self._clock(), options or {})

    def detail(self, row_id: int) -> tuple[dict, list[dict]]:
        """The row with its line items."""
        row = self.get(row_id)
        return row, list(self._repo.list_items(row_id))

    def build_payload(
        self, form: Mapping[str, Any], items: Optional[Sequence[LineItemInput]] = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for f in self._resource.fields:
            payload[f.name] = _parse_field(f, form.get(f.name))
        spec = self._resource.items
        if spec and items is not None:
            payload[spec.total_column] = items_total(items)
        if self._resource.compute:
            payload = self._resource.compute(payload)
        return payload

    def create(
        self,
        *,
        current_role,
        form: Mapping[str, Any],
        items: Sequence[Mapping[str, Any]] = (),
    ) -> int:
        require_editor(current_role)
        kept: list[LineItemInput] = []
        spec_items = self._resource.items
        if spec_items:
            kept = parse_items(items)
            if len(kept) < spec_items.min_items:
                raise ValidationError("Please add at least one line item")
        payload = self.build_payload(form, kept if spec_items else None)

        spec = self._resource.number
        if spec:
            today = self._clock()
            prefix = sequence_prefix(spec.prefix, today, spec.period)
            existing = self._repo.count_numbers_like(spec.column, prefix)
            payload[spec.column] = next_sequence_number(
                spec.prefix, today, existing, period=spec.period, width=spec.width
            )

        return self._repo.insert(payload, kept)

    def update(self, *, current_role, row_id: int, form: Mapping[str, Any]) -> None:
        require_editor(current_role)
        if not self._repo.get_by_id(row_id):
            raise NotFoundError(f"{self._resource.singular} not found")

        items = None
        spec = self._resource.items
        if spec:
            # Items are fixed once saved; the header total follows them.
            items = [
                LineItemInput(it.get("product_id"), to_float(it.get("quantity")), to_float(it.get("rate")))
                for it in self._repo.list_items(row_id)
            ]
        self._repo.update(row_id, self.build_payload(form, items))

    def delete(self, *, current_role, row_id: int) -> None:
        require_editor(current_role)
        if not self._repo.delete(row_id):
            raise NotFoundError(f"{self._resource.singular} not found")

    def blank_form(self) -> dict[str, str]:
        return {f.name: _form_text(f, f.initial()) for f in self._resource.fields}

    def form_values(self, row: Mapping[str, Any]) -> dict[str, str]:
        """Row values as the strings an edit form is pre-filled with."""
        return {f.name: _form_text(f, row.get(f.name)) for f in self._resource.fields}

    def _decorate(self, row: dict) -> dict:
        row = dict(row)
        if self._resource.decorate:
            row = self._resource.decorate(row)
        return row


def _parse_field(f: Field, raw: Any) -> Any:
    if f.kind == "checkbox":
        return raw is not None and str(raw).strip().lower() not in _FALSE_VALUES

    text = optional_text(raw)
    if text is None:
        if f.required:
            raise ValidationError(f"{f.label} is required")
        return 0.0 if f.kind == "number" and not f.nullable else None

    if f.kind == "number":
        return parse_amount(text)
    if f.kind == "date":
        return parse_form_date(text, f.label)
    if f.kind == "time":
        return parse_form_time(text, f.label)
    if f.kind == "lookup":
        return parse_optional_id(text)
    if f.kind == "select":
        allowed = {value for value, _ in f.choices}
        if text not in allowed:
            raise ValidationError(f"{f.label} has an invalid value")
        return text
    return text


def _form_text(f: Field, value: Any) -> str:
    if value is None:
        return ""
    if f.kind == "checkbox":
        return "1" if value else ""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (time, timedelta)):
        return format_display_time(value)
    if isinstance(value, (float, Decimal)):
        number = float(value)
        return str(int(number)) if number.is_integer() else str(number)
    return str(value)
