"""Customer account routes."""

from __future__ import annotations

from flask import Blueprint, g, jsonify

from ._helpers import components, json_body, require_customer


customer_bp = Blueprint("customer", __name__)


@customer_bp.post("/customers")
def register():
    payload = json_body()
    result = components()["customer_service"].register(
        name=payload.get("name"),
        email=payload.get("email"),
        password=payload.get("password"),
    )
    return jsonify(result), 201


@customer_bp.post("/customers/login")
def login():
    payload = json_body()
    result = components()["customer_service"].login(
        email=payload.get("email"),
        password=payload.get("password"),
    )
    return jsonify(result)


@customer_bp.get("/customer")
@require_customer
def get_profile():
    return jsonify(components()["customer_service"].get_profile(g.customer_id))


@customer_bp.put("/customer")
@require_customer
def update_profile():
    return jsonify(components()["customer_service"].update_profile(g.customer_id, json_body()))


@customer_bp.put("/customer/address")
@require_customer
def update_address():
    return jsonify(components()["customer_service"].update_address(g.customer_id, json_body()))


@customer_bp.put("/customer/creditCard")
@require_customer
def update_credit_card():
    payload = json_body()
    return jsonify(components()["customer_service"].update_credit_card(g.customer_id, payload.get("credit_card")))
