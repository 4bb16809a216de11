from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .items import LineItemInput
from .resource import Lookup


class CrudRepository(Protocol):
    """Row-level access to one table described by a ``Resource``.

    Rows are plain dicts: the table's own columns plus any joined label
    columns declared by the resource.
    """

    def list_rows(self) -> Sequence[dict]:
        raise NotImplementedError

    def get_by_id(self, row_id: int) -> Optional[dict]:
        raise NotImplementedError

    def insert(self, payload: dict[str, Any], items: Sequence[LineItemInput] = ()) -> int:
        """Insert the row and, for resources with line items, its items in the same transaction."""

        raise NotImplementedError

    def update(self, row_id: int, payload: dict[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, row_id: int) -> bool:
        """Delete the row; line items go first, in the same transaction."""

        raise NotImplementedError

    def list_items(self, row_id: int) -> Sequence[dict]:
        """Return item rows: id, product_id, product_name, product_code, unit, quantity, rate, amount."""

        raise NotImplementedError

    def count_numbers_like(self, column: str, prefix: str) -> int:
        raise NotImplementedError

    def list_options(self, lookup: Lookup) -> Sequence[dict]:
        raise NotImplementedError
