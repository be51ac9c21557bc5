"""Runtime configuration for the IHG client.

Relies on pydantic-settings so that environment variables (prefixed with ``TRIPPE_``)
can override defaults, e.g. ``TRIPPE_API_KEY`` or ``TRIPPE_TIMEOUT_S``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Annotated, Iterable, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from trippe import __version__
from trippe.hotels.booking import BOOKING_PAGE_URL

# Read from the environment as comma-separated strings, not JSON.
RateCodes = Annotated[Tuple[str, ...], NoDecode]


def _parse_codes(value: object, name: str) -> Tuple[str, ...]:
    if value is None or value == "":
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item).strip().upper() for item in value if str(item).strip())
    if isinstance(value, str):
        codes: Iterable[str] = (code.strip().upper() for code in value.split(","))
        return tuple(code for code in codes if code)
    raise TypeError(f"{name} must be provided as a comma-separated string or list")


class Settings(BaseSettings):
    """Captures runtime configuration for the client."""

    api_key: Optional[str] = Field(default=None, description="IHG API key sent as x-ihg-api-key")
    api_base_url: str = Field(
        default="https://apis.ihg.com",
        description="Base URL of the IHG availability/profile APIs",
    )
    booking_base_url: str = Field(
        default=BOOKING_PAGE_URL,
        description="Room and rate selection page used for booking links",
    )
    timeout_s: float = Field(default=30.0, description="HTTP timeout in seconds")
    user_agent: str = Field(default=f"trippe/{__version__}")
    log_level: str = Field(default="INFO")
    log_dir: Optional[Path] = Field(default=None, description="Also write logs to this directory when set")

    calendar_rate_codes: RateCodes = Field(
        default=("IVANI", "IDMAP", "IDME0", "IDME2", "IGCOR", "IDVPD"),
        description="Rate plans considered by the lowest-price calendar",
    )
    legacy_calendar_rate_codes: RateCodes = Field(
        default=("IVANI", "IDMAP", "IDME0"),
        description="Rate plans considered by the legacy flat calendar",
    )
    stay_rate_plan_codes: RateCodes = Field(
        default=("IVANI",),
        description="Rate plans requested from the offers endpoint",
    )

    model_config = SettingsConfigDict(
        env_prefix="TRIPPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("api_base_url", "booking_base_url")
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_dir", mode="before")
    def _expand_log_dir(cls, value: str | Path | None) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser()

    @field_validator("timeout_s")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout_s must be positive")
        return value

    @field_validator("calendar_rate_codes", mode="before")
    def _parse_calendar_rate_codes(cls, value: object) -> Tuple[str, ...]:
        return _parse_codes(value, "calendar_rate_codes")

    @field_validator("legacy_calendar_rate_codes", mode="before")
    def _parse_legacy_rate_codes(cls, value: object) -> Tuple[str, ...]:
        return _parse_codes(value, "legacy_calendar_rate_codes")

    @field_validator("stay_rate_plan_codes", mode="before")
    def _parse_stay_rate_plan_codes(cls, value: object) -> Tuple[str, ...]:
        return _parse_codes(value, "stay_rate_plan_codes")

    def default_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.api_key:
            headers["x-ihg-api-key"] = self.api_key
        return headers
