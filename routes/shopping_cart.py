"""Cart, order and payment routes."""

from __future__ import annotations

from flask import Blueprint, g, jsonify

from ._helpers import components, json_body, require_customer


cart_bp = Blueprint("shopping_cart", __name__)


@cart_bp.get("/shoppingcart/generateUniqueId")
def generate_unique_cart():
    return jsonify({"cart_id": components()["cart_service"].generate_cart_id()})


@cart_bp.post("/shoppingcart/add")
def add_item_to_cart():
    payload = json_body()
    item = components()["cart_service"].add_item(
        cart_id=payload.get("cart_id"),
        product_id=payload.get("product_id"),
        attributes=payload.get("attributes") or "",
        quantity=payload.get("quantity", 1),
    )
    return jsonify(item), 201


@cart_bp.get("/shoppingcart/<cart_id>")
def get_cart(cart_id: str):
    return jsonify(components()["cart_service"].list_items(cart_id))


@cart_bp.put("/shoppingcart/update/<int:item_id>")
def update_cart_item(item_id: int):
    payload = json_body()
    return jsonify(components()["cart_service"].update_quantity(item_id, payload.get("quantity")))


@cart_bp.delete("/shoppingcart/empty/<cart_id>")
def empty_cart(cart_id: str):
    components()["cart_service"].clear_cart(cart_id)
    return jsonify([])


@cart_bp.delete("/shoppingcart/removeProduct/<int:item_id>")
def remove_item_from_cart(item_id: int):
    removed = components()["cart_service"].remove_item(item_id)
    return jsonify({"message": f"Deleted {removed} record", "deleted": removed})


@cart_bp.post("/orders")
@require_customer
def create_order():
    payload = json_body()
    order_id = components()["order_service"].create_order(
        cart_id=payload.get("cart_id"),
        customer_id=g.customer_id,
        meta=payload,
    )
    return jsonify({"order_id": order_id}), 201


@cart_bp.get("/orders/inCustomer")
@require_customer
def get_customer_orders():
    return jsonify(components()["order_service"].get_customer_orders(g.customer_id))


@cart_bp.get("/orders/<int:order_id>")
@require_customer
def get_order(order_id: int):
    return jsonify(components()["order_service"].get_order(order_id, customer_id=g.customer_id))


@cart_bp.get("/orders/shortDetail/<int:order_id>")
@require_customer
def get_order_summary(order_id: int):
    return jsonify(components()["order_service"].get_order_summary(order_id, customer_id=g.customer_id))


@cart_bp.post("/stripe/charge")
@require_customer
def process_stripe_payment():
    payload = json_body()
    result = components()["payment_service"].capture(
        order_id=payload.get("order_id"),
        customer_id=g.customer_id,
        email=payload.get("email"),
        payment_token=payload.get("stripeToken"),
    )
    return jsonify(result)
