"""Product attribute and tax lookups."""

from __future__ import annotations

from flask import Blueprint, jsonify

from ._helpers import components


attributes_bp = Blueprint("attributes", __name__)


@attributes_bp.get("/attributes")
def list_attributes():
    return jsonify(components()["catalog_service"].list_attributes())


@attributes_bp.get("/attributes/<int:attribute_id>")
def get_attribute(attribute_id: int):
    return jsonify(components()["catalog_service"].get_attribute(attribute_id))


@attributes_bp.get("/attributes/values/<int:attribute_id>")
def attribute_values(attribute_id: int):
    return jsonify(components()["catalog_service"].get_attribute_values(attribute_id))


@attributes_bp.get("/attributes/inProduct/<int:product_id>")
def product_attributes(product_id: int):
    return jsonify(components()["catalog_service"].get_product_attributes(product_id))


@attributes_bp.get("/tax")
def list_taxes():
    return jsonify(components()["catalog_service"].list_taxes())


@attributes_bp.get("/tax/<int:tax_id>")
def get_tax(tax_id: int):
    return jsonify(components()["catalog_service"].get_tax(tax_id))
