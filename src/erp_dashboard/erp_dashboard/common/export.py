from __future__ import annotations

import csv
import io
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from .table import Column, export_value

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def rows_to_frame(rows: Iterable[Mapping[str, Any]], columns: Sequence[Column]) -> pd.DataFrame:
    data = [[export_value(row, c) for c in columns] for row in rows]
    return pd.DataFrame(data, columns=[c.header for c in columns])


def export_xlsx(rows: Iterable[Mapping[str, Any]], columns: Sequence[Column], *, sheet_name: str = "Data") -> io.BytesIO:
    df = rows_to_frame(rows, columns)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        # Excel caps sheet names at 31 characters
        df.to_excel(writer, index=False, sheet_name=sheet_name[:31])
    out.seek(0)
    return out


def export_csv(rows: Iterable[Mapping[str, Any]], columns: Sequence[Column]) -> bytes:
    """Write the given columns to CSV bytes (UTF-8 with BOM so Excel opens it cleanly)."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=[c.header for c in columns])
    writer.writeheader()
    for row in rows:
        writer.writerow({c.header: export_value(row, c) for c in columns})
    return out.getvalue().encode("utf-8-sig")
