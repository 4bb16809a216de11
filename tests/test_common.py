from __future__ import annotations

from datetime import date, time, timedelta

import pytest

from src.erp_dashboard.erp_dashboard.common.datetime_utils import (
    format_display_date,
    format_display_time,
    month_bounds,
    parse_date_arg,
    parse_form_time,
)
from src.erp_dashboard.erp_dashboard.common.sequence import MONTHLY, next_sequence_number, sequence_prefix
from src.erp_dashboard.erp_dashboard.common.table import Column, badge_class, filter_rows, format_cell, paginate
from src.erp_dashboard.erp_dashboard.common.validators import (
    optional_text,
    parse_amount,
    parse_optional_id,
    require_email,
    require_hex_color,
)
from src.erp_dashboard.erp_dashboard.core.exceptions import ValidationError


def test_sequence_number_counts_existing_numbers_for_the_day():
    on = date(2024, 3, 5)
    assert sequence_prefix("PR", on) == "PR-20240305"
    assert next_sequence_number("PR", on, 0) == "PR-20240305-001"
    assert next_sequence_number("PR", on, 2) == "PR-20240305-003"


def test_monthly_sequence_uses_month_token_and_width():
    on = date(2024, 3, 5)
    assert next_sequence_number("INV", on, 11, period=MONTHLY, width=4) == "INV-202403-0012"


def test_filter_rows_is_case_insensitive_and_ignores_blank_search():
    rows = [{"name": "LDPE Granules", "code": "RM-001"}, {"name": "Masterbatch", "code": "RM-002"}]
    assert filter_rows(rows, "", ("name",)) == rows
    assert filter_rows(rows, "ldpe", ("name", "code")) == [rows[0]]
    assert filter_rows(rows, "rm-002", ("name", "code")) == [rows[1]]


def test_filter_rows_skips_missing_values():
    rows = [{"name": None, "code": "X"}]
    assert filter_rows(rows, "y", ("name", "code")) == []


def test_paginate_clamps_page_into_range():
    rows = list(range(23))
    page = paginate(rows, 9, 10)
    assert page.page == 3
    assert page.items == [20, 21, 22]
    assert page.first_index == 21
    assert page.last_index == 23
    assert page.has_prev and not page.has_next


def test_paginate_empty_rows_has_single_page():
    page = paginate([], 1, 10)
    assert page.pages == 1
    assert page.total == 0
    assert page.first_index == 0


def test_format_cell_kinds():
    row = {"d": date(2024, 1, 2), "t": timedelta(hours=8, minutes=5), "m": 1234.5, "n": 3.0, "s": "half_day"}
    assert format_cell(row, Column("d", "D", "date")) == "02/01/2024"
    assert format_cell(row, Column("t", "T", "time")) == "08:05"
    assert format_cell(row, Column("m", "M", "money")) == "₹1,234.50"
    assert format_cell(row, Column("n", "N", "number")) == "3"
    assert format_cell(row, Column("s", "S", "badge")) == "half day"
    assert format_cell(row, Column("missing", "X")) == "-"


def test_badge_class_groups_statuses():
    assert badge_class("present") == "success"
    assert badge_class("Low Stock") == "danger"
    assert badge_class("pending") == "warning"
    assert badge_class("inactive") == "secondary"
    assert badge_class("something-else") == "info"


def test_display_helpers():
    assert format_display_date(None) == "-"
    assert format_display_date("2024-05-06") == "06/05/2024"
    assert format_display_time(time(17, 30)) == "17:30"
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_parse_date_arg_falls_back_on_garbage():
    default = date(2024, 1, 1)
    assert parse_date_arg("2024-02-03", default) == date(2024, 2, 3)
    assert parse_date_arg("not-a-date", default) == default
    assert parse_date_arg(None, default) == default


def test_parse_form_time_accepts_seconds():
    assert parse_form_time("09:15:30", "In Time") == time(9, 15, 30)
    with pytest.raises(ValidationError):
        parse_form_time("9 o'clock", "In Time")


def test_validators():
    assert require_email(" User@Example.com ") == "user@example.com"
    with pytest.raises(ValidationError):
        require_email("nope")
    assert require_hex_color("", "Primary Color", "#3b82f6") == "#3b82f6"
    assert require_hex_color("#ABCDEF", "Primary Color", "#3b82f6") == "#abcdef"
    with pytest.raises(ValidationError):
        require_hex_color("blue", "Primary Color", "#3b82f6")
    assert optional_text("  ") is None
    assert parse_amount("1,250.50") == 1250.5
    assert parse_amount("abc") == 0.0
    assert parse_amount("nan") == 0.0
    assert parse_amount("inf") == 0.0
    assert parse_amount("-Infinity") == 0.0
    assert parse_amount(float("nan")) == 0.0
    assert parse_optional_id("") is None
    with pytest.raises(ValidationError):
        parse_optional_id("x")


def test_settings_module_follows_app_env(monkeypatch):
    from config import get_settings_module

    monkeypatch.setenv("APP_ENV", "Production")
    assert get_settings_module() == "config.production"
    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "config.testing"
    monkeypatch.setenv("APP_ENV", "staging")
    assert get_settings_module() == "config.development"
