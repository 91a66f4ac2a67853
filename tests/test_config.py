"""Tests for configuration helpers."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from autorecon.config import DEFAULT_CORS_ORIGINS, Settings, parse_comma_list


def test_parse_comma_list_defaults() -> None:
    assert parse_comma_list(None, ["a"]) == ["a"]


def test_parse_comma_list_accepts_list() -> None:
    assert parse_comma_list(["x", "y"], ["a"]) == ["x", "y"]


def test_parse_comma_list_splits_string() -> None:
    assert parse_comma_list("x, y, ,z", ["a"]) == ["x", "y", "z"]


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("RECONCILIATION_AMOUNT_TOLERANCE", "0.05")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setenv("ENV", "staging")

    settings = Settings(_env_file=None)

    assert settings.reconciliation_amount_tolerance == Decimal("0.05")
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.environment == "staging"


def test_settings_defaults(monkeypatch) -> None:
    for name in ("RECONCILIATION_AMOUNT_TOLERANCE", "CORS_ORIGINS", "ENVIRONMENT", "ENV", "MAX_UPLOAD_BYTES"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.reconciliation_amount_tolerance == Decimal("0.01")
    assert settings.max_upload_bytes == 10 * 1024 * 1024
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_settings_reject_non_positive_tolerance(monkeypatch) -> None:
    monkeypatch.setenv("RECONCILIATION_AMOUNT_TOLERANCE", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
