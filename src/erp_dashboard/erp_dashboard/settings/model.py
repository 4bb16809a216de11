from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_PRIMARY_COLOR, DEFAULT_SECONDARY_COLOR


@dataclass(frozen=True)
class SystemSettings:
    settings_id: int
    company_name: str
    logo_url: Optional[str] = None
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    gst_number: Optional[str] = None
    license_number: Optional[str] = None
