"""
Tests for shared helpers: formatting, settings, storage paths, db status parsing
"""
from datetime import date
from decimal import Decimal

from core import db, formatting, settings, storage


def test_format_currency():
    assert formatting.format_currency(1500) == "LKR 1,500"
    assert formatting.format_currency(Decimal("1234567.5")) == "LKR 1,234,568"
    assert formatting.format_currency(None) == "LKR 0"
    assert formatting.format_currency(-250) == "-LKR 250"


def test_format_date():
    assert formatting.format_date(date(2025, 3, 5)) == "March 5, 2025"
    assert formatting.format_date("2024-12-25") == "December 25, 2024"


def test_calculate_percentage():
    assert formatting.calculate_percentage(50, 200) == 25
    assert formatting.calculate_percentage(5, 0) == 0
    assert formatting.calculate_percentage(300, 100) == 100
    assert formatting.calculate_percentage(Decimal("1"), Decimal("8")) == 13


def test_env_helpers_fall_back_on_bad_values(monkeypatch):
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "not-a-number")
    assert settings.max_upload_bytes() == settings.DEFAULT_MAX_UPLOAD_BYTES
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "-5")
    assert settings.max_upload_bytes() == settings.DEFAULT_MAX_UPLOAD_BYTES
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "1024")
    assert settings.max_upload_bytes() == 1024


def test_team_year_and_cors_defaults(monkeypatch):
    monkeypatch.delenv("TEAM_YEAR", raising=False)
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    assert settings.team_year() == "2025/26"
    assert settings.cors_origins() == ["https://a.example", "https://b.example"]


def test_storage_public_url_round_trip():
    url = storage.public_url("team-photos", "abc.png", base_url="https://files.example/")
    assert url == "https://files.example/storage/v1/object/public/team-photos/abc.png"
    assert storage.path_from_public_url("team-photos", url) == "abc.png"
    assert storage.path_from_public_url("program-images", url) is None


def test_storage_object_name_keeps_extension():
    name = storage.object_name("Photo.JPG", folder="/2025/")
    assert name.startswith("2025/")
    assert name.endswith(".jpg")


def test_sanitize_database_url_drops_sslmode():
    url = db._sanitize_database_url("postgresql://u:p@host/db?sslmode=require&application_name=site")
    assert url == "postgresql://u:p@host/db?application_name=site"


def test_affected_rows():
    assert db.affected_rows("DELETE 1") == 1
    assert db.affected_rows("UPDATE 0") == 0
    assert db.affected_rows("") == 0


def test_money_value_is_a_json_number():
    assert formatting.money_value(Decimal("600000.00")) == 600000
    assert isinstance(formatting.money_value(Decimal("600000.00")), int)
    assert formatting.money_value(Decimal("2000.50")) == 2000.5
    assert formatting.money_value(None) == 0
