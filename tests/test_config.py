import json

import pytest

from tshirtshop.config import load_env, validate_currency


def test_defaults(monkeypatch, tmp_path):
    for key in ("DATABASE_URL", "SECRET_KEY", "CURRENCY", "CLEAR_CART_ON_CHECKOUT"):
        monkeypatch.delenv(key, raising=False)
    config = load_env(tmp_path / "missing.json", dotenv_path=tmp_path / ".env")
    assert config.currency == "USD"
    assert config.token_ttl_hours == 24
    assert config.clear_cart_on_checkout is True
    assert config.auth_header == "USER-KEY"


def test_settings_file_overrides_only_hot_keys(monkeypatch, tmp_path):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"CURRENCY": "eur", "SECRET_KEY": "from-file", "CLEAR_CART_ON_CHECKOUT": "false"}))
    config = load_env(settings)
    assert config.currency == "EUR"
    assert config.secret_key == "from-env"
    assert config.clear_cart_on_checkout is False


def test_unreadable_settings_file_is_ignored(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text("{not json")
    assert load_env(settings).currency


@pytest.mark.parametrize("code", ["US", "USDX", "12$"])
def test_invalid_currency(code):
    with pytest.raises(ValueError):
        validate_currency(code)


def test_dotenv_file_fills_missing_variables(monkeypatch, tmp_path):
    for key in ("STRIPE_SECRET_KEY", "SECRET_KEY"):
        # registered first so the values loaded from .env are undone afterwards
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    dotenv = tmp_path / ".env"
    dotenv.write_text("STRIPE_SECRET_KEY=sk_from_dotenv\nSECRET_KEY=dotenv-secret\nLOG_LEVEL=DEBUG\n")

    config = load_env(tmp_path / "missing.json", dotenv_path=dotenv)

    assert config.stripe_secret_key == "sk_from_dotenv"
    assert config.secret_key == "dotenv-secret"
    # real environment variables win over the file
    assert config.log_level == "WARNING"
