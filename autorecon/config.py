"""Service settings.

Values come from the process environment or a local ``.env`` file. Defaults are
meant for local runs and CI; deployments set the environment variables below.
"""

from decimal import Decimal
from functools import cached_property

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
]


def parse_comma_list(value: str | list[str] | None, default: list[str]) -> list[str]:
    """Split ``"a, b,,c"`` into ``["a", "b", "c"]``; ``None`` gives ``default``."""
    if value is None:
        return default
    if isinstance(value, list):
        return value
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Reconciliation service settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: str = Field(default="development", validation_alias=AliasChoices("ENVIRONMENT", "ENV"))
    debug: bool = False

    # Amount differences strictly below this count as equal.
    reconciliation_amount_tolerance: Decimal = Field(
        default=Decimal("0.01"),
        gt=0,
        validation_alias="RECONCILIATION_AMOUNT_TOLERANCE",
    )

    # Per uploaded ledger file
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, validation_alias="MAX_UPLOAD_BYTES")

    # e.g. CORS_ORIGINS="https://recon.example.com,http://localhost:5173"
    cors_origins_str: str | None = Field(default=None, validation_alias="CORS_ORIGINS")

    @cached_property
    def cors_origins(self) -> list[str]:
        return parse_comma_list(self.cors_origins_str, DEFAULT_CORS_ORIGINS)


settings = Settings()
