from functools import wraps
from typing import Any, Dict

from flask import current_app, g, request


def components() -> Dict[str, Any]:
    return current_app.extensions["shop_components"]


def json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict() if request.form else {}


def _raw_credential():
    header = current_app.config["SHOP_CONFIG"].auth_header
    return request.headers.get(header) or request.headers.get("Authorization")


def require_customer(view):
    """Resolve the bearer credential into ``g.customer_id`` or fail with 401."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.customer_id = components()["tokens"].verify(_raw_credential()).unwrap()
        return view(*args, **kwargs)

    return wrapper
