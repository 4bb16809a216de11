from __future__ import annotations

import base64
from typing import Any, Mapping, Optional

from ..common.validators import optional_text, require_hex_color, require_non_empty
from ..core.constants import DEFAULT_PRIMARY_COLOR, DEFAULT_SECONDARY_COLOR
from ..core.exceptions import ValidationError
from ..core.permissions import require_admin
from .model import SystemSettings
from .repository import SettingsRepository

ALLOWED_LOGO_TYPES = {"image/png", "image/jpeg", "image/gif", "image/svg+xml", "image/webp"}


def logo_data_url(content: bytes, mimetype: str) -> str:
    if mimetype not in ALLOWED_LOGO_TYPES:
        raise ValidationError("Logo must be an image (PNG, JPEG, GIF, SVG or WebP)")
    return f"data:{mimetype};base64,{base64.b64encode(content).decode('ascii')}"


class SettingsService:
    """Single-row system configuration: company details and branding."""

    def __init__(self, repo: SettingsRepository):
        self._repo = repo

    def get_settings(self) -> Optional[SystemSettings]:
        return self._repo.get_first()

    def save(
        self,
        *,
        current_role,
        form: Mapping[str, Any],
        logo: Optional[bytes] = None,
        logo_mimetype: Optional[str] = None,
    ) -> int:
        """Insert the settings row when none exists, otherwise update it.

        The stored logo is kept unless a new file is uploaded or
        ``remove_logo`` is set.
        """
        require_admin(current_role)

        values: dict[str, Any] = {
            "company_name": require_non_empty(form.get("company_name"), "Company Name"),
            "primary_color": require_hex_color(form.get("primary_color"), "Primary Color", DEFAULT_PRIMARY_COLOR),
            "secondary_color": require_hex_color(
                form.get("secondary_color"), "Secondary Color", DEFAULT_SECONDARY_COLOR
            ),
            "address": optional_text(form.get("address")),
            "phone": optional_text(form.get("phone")),
            "email": optional_text(form.get("email")),
            "gst_number": optional_text(form.get("gst_number")),
            "license_number": optional_text(form.get("license_number")),
        }
        if logo:
            values["logo_url"] = logo_data_url(logo, logo_mimetype or "")
        elif form.get("remove_logo"):
            values["logo_url"] = None

        existing = self._repo.get_first()
        if existing is None:
            return self._repo.insert(values)
        self._repo.update(existing.settings_id, values)
        return existing.settings_id
