import pytest
from pydantic import ValidationError

from nzloans.utils.config_loader import AppConfig, load_app_config


def test_bundled_config_loads(monkeypatch):
    monkeypatch.delenv("CATALOGUE_MODE", raising=False)
    monkeypatch.delenv("CATALOGUE_BASE_URL", raising=False)

    cfg = load_app_config()

    assert cfg.catalogue.mode == "local"
    assert cfg.catalogue.products_path == "data/products.json"
    assert cfg.clicks.storage_key == "nz_product_clicks"
    assert (cfg.clicks.max_entries, cfg.clicks.truncate_to) == (1000, 500)
    assert cfg.clicks.currency == "NZD"


def test_empty_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("CATALOGUE_MODE", raising=False)
    monkeypatch.delenv("CATALOGUE_BASE_URL", raising=False)
    path = tmp_path / "app_config.yml"
    path.write_text("", encoding="utf-8")

    assert load_app_config(path) == AppConfig()


def test_env_overrides_catalogue_settings(tmp_path, monkeypatch):
    path = tmp_path / "app_config.yml"
    path.write_text("catalogue:\n  mode: local\n", encoding="utf-8")
    monkeypatch.setenv("CATALOGUE_MODE", "HTTP")
    monkeypatch.setenv("CATALOGUE_BASE_URL", "https://loans.example.co.nz")

    cfg = load_app_config(path)

    assert cfg.catalogue.mode == "http"
    assert cfg.catalogue.base_url == "https://loans.example.co.nz"


def test_invalid_env_mode_is_rejected(tmp_path, monkeypatch):
    path = tmp_path / "app_config.yml"
    path.write_text("", encoding="utf-8")
    monkeypatch.setenv("CATALOGUE_MODE", "ftp")

    with pytest.raises(ValueError):
        load_app_config(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_app_config(tmp_path / "nope.yml")


def test_invalid_limits_fail_validation(tmp_path, monkeypatch):
    monkeypatch.delenv("CATALOGUE_MODE", raising=False)
    path = tmp_path / "app_config.yml"
    path.write_text("clicks:\n  max_entries: 100\n  truncate_to: 200\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_app_config(path)
