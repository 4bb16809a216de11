from __future__ import annotations

import math
import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name).lower()
    if not _EMAIL.match(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email


def require_hex_color(value: Optional[str], field_name: str, default: str) -> str:
    v = (value or "").strip()
    if not v:
        return default
    if not _HEX_COLOR.match(v):
        raise ValidationError(f"{field_name} must be a hex color like #3b82f6")
    return v.lower()


def optional_text(value: Any) -> Optional[str]:
    """Blank form values are stored as NULL."""
    if value is None:
        return None
    v = str(value).strip()
    return v or None


def parse_amount(value: Any) -> float:
    """Lenient number parsing: anything unparseable counts as 0."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        try:
            result = float(str(value).strip().replace(",", ""))
        except ValueError:
            return 0.0
    # "nan" and "inf" parse as floats but are not amounts
    return result if math.isfinite(result) else 0.0


def parse_optional_id(value: Any) -> Optional[int]:
    if value is None:
        return None
    v = str(value).strip()
    if not v:
        return None
    try:
        return int(v)
    except ValueError:
        raise ValidationError("Invalid selection")
