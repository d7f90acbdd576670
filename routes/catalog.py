"""Read-only catalog routes."""

from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from ._helpers import components, json_body, require_customer


catalog_bp = Blueprint("catalog", __name__)


@catalog_bp.get("/products")
def list_products():
    result = components()["catalog_service"].list_products(
        category_id=request.args.get("category_id", type=int),
        department_id=request.args.get("department_id", type=int),
        page=request.args.get("page", 1, type=int),
        page_size=request.args.get("limit", 20, type=int),
    )
    return jsonify(result)


@catalog_bp.get("/products/search")
def search_products():
    result = components()["catalog_service"].search_products(
        request.args.get("query_string", ""),
        page=request.args.get("page", 1, type=int),
        page_size=request.args.get("limit", 20, type=int),
    )
    return jsonify(result)


@catalog_bp.get("/products/<int:product_id>")
def get_product(product_id: int):
    return jsonify(components()["catalog_service"].get_product(product_id))


@catalog_bp.get("/departments")
def list_departments():
    return jsonify(components()["catalog_service"].list_departments())


@catalog_bp.get("/categories")
def list_categories():
    department_id = request.args.get("department_id", type=int)
    return jsonify(components()["catalog_service"].list_categories(department_id))


@catalog_bp.get("/products/inCategory/<int:category_id>")
def products_in_category(category_id: int):
    result = components()["catalog_service"].get_products_in_category(
        category_id,
        page=request.args.get("page", 1, type=int),
        page_size=request.args.get("limit", 20, type=int),
    )
    return jsonify(result)


@catalog_bp.get("/products/inDepartment/<int:department_id>")
def products_in_department(department_id: int):
    result = components()["catalog_service"].get_products_in_department(
        department_id,
        page=request.args.get("page", 1, type=int),
        page_size=request.args.get("limit", 20, type=int),
    )
    return jsonify(result)


@catalog_bp.get("/products/<int:product_id>/locations")
def product_locations(product_id: int):
    return jsonify(components()["catalog_service"].get_product_locations(product_id))


@catalog_bp.get("/products/<int:product_id>/reviews")
@catalog_bp.get("/reviews/inProduct/<int:product_id>")
def product_reviews(product_id: int):
    return jsonify(components()["catalog_service"].get_product_reviews(product_id))


@catalog_bp.post("/products/<int:product_id>/reviews")
@require_customer
def create_product_review(product_id: int):
    payload = json_body()
    review = components()["catalog_service"].create_product_review(
        product_id,
        customer_id=g.customer_id,
        review=payload.get("review"),
        rating=payload.get("rating"),
    )
    return jsonify(review), 201


@catalog_bp.get("/departments/<int:department_id>")
def get_department(department_id: int):
    return jsonify(components()["catalog_service"].get_department(department_id))


@catalog_bp.get("/department/andCategories")
def departments_with_categories():
    return jsonify(components()["catalog_service"].departments_with_categories())


@catalog_bp.get("/categories/<int:category_id>")
def get_category(category_id: int):
    return jsonify(components()["catalog_service"].get_category(category_id))


@catalog_bp.get("/categories/inProduct/<int:product_id>")
def product_categories(product_id: int):
    return jsonify(components()["catalog_service"].get_product_categories(product_id))


@catalog_bp.get("/categories/inDepartment/<int:department_id>")
def department_categories(department_id: int):
    return jsonify(components()["catalog_service"].get_department_categories(department_id))
