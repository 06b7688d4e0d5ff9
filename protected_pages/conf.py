"""
App settings, read from ``settings.PROTECTED_PAGES``.

    PROTECTED_PAGES = {
        "FAIL_OPEN": False,          # let responses through when the store is down
        "BYPASS_PERMISSION": "protected_pages.bypass_pages_password_protection",
        "SESSION_KEY": "_protected_page",
        "FLUSH_CACHE_ON_SAVE": True, # clear the default cache after admin writes
    }
"""
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from pydantic import BaseModel, ConfigDict, Field, ValidationError

BYPASS_PERMISSION = "protected_pages.bypass_pages_password_protection"


class GateSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    fail_open: bool = False
    bypass_permission: str = Field(default=BYPASS_PERMISSION, min_length=1)
    session_key: str = Field(default="_protected_page", min_length=1)
    flush_cache_on_save: bool = True


def gate_settings() -> GateSettings:
    raw = getattr(settings, "PROTECTED_PAGES", None) or {}
    try:
        return GateSettings.model_validate({str(k).lower(): v for k, v in raw.items()})
    except ValidationError as e:
        raise ImproperlyConfigured(f"Invalid PROTECTED_PAGES setting: {e}") from e
