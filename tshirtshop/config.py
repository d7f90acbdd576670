import os
from dataclasses import dataclass
from pathlib import Path
import json
import logging
from typing import Optional

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    database_url: str
    secret_key: str
    log_level: str = "INFO"
    currency: str = "USD"
    token_ttl_hours: int = 24
    auth_header: str = "USER-KEY"
    stripe_secret_key: str = ""
    stripe_api_base: str = "https://api.stripe.com"
    payment_timeout_seconds: float = 10.0
    clear_cart_on_checkout: bool = True


ALLOWED_HOT_KEYS = {"CURRENCY", "CLEAR_CART_ON_CHECKOUT", "PAYMENT_TIMEOUT_SECONDS"}


def validate_currency(value: Optional[str]) -> str:
    v = (value or "USD").strip().upper()
    if len(v) != 3 or not v.isalpha():
        raise ValueError("Invalid currency code: expected ISO4217 length 3")
    return v


def _as_bool(value, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _load_settings_file(path: Optional[Path] = None) -> dict:
    path = path or Path(__file__).resolve().parents[1] / "data" / "settings.json"
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return {}
    # sensitive values only come from the environment
    return {k: v for k, v in data.items() if k in ALLOWED_HOT_KEYS} if isinstance(data, dict) else {}


def load_env(settings_path: Optional[Path] = None, dotenv_path: Optional[Path] = None) -> AppConfig:
    # .env fills the environment without overriding it; data/settings.json
    # overrides non-sensitive keys
    load_dotenv(dotenv_path)
    s = _load_settings_file(settings_path)
    return AppConfig(
        database_url=os.getenv("DATABASE_URL", "sqlite:///data/tshirtshop.db"),
        secret_key=os.getenv("SECRET_KEY", "dev_secret"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        currency=validate_currency(s.get("CURRENCY") or os.getenv("CURRENCY")),
        token_ttl_hours=int(os.getenv("TOKEN_TTL_HOURS", "24")),
        auth_header=os.getenv("AUTH_HEADER", "USER-KEY"),
        stripe_secret_key=os.getenv("STRIPE_SECRET_KEY", ""),
        stripe_api_base=os.getenv("STRIPE_API_BASE", "https://api.stripe.com").rstrip("/"),
        payment_timeout_seconds=float(
            s.get("PAYMENT_TIMEOUT_SECONDS") or os.getenv("PAYMENT_TIMEOUT_SECONDS") or 10
        ),
        clear_cart_on_checkout=_as_bool(
            s.get("CLEAR_CART_ON_CHECKOUT", os.getenv("CLEAR_CART_ON_CHECKOUT")), True
        ),
    )
