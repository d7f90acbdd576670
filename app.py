"""TShirtShop Flask application."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from routes import attributes, catalog, customer, shopping_cart
from tshirtshop.config import AppConfig, load_env
from tshirtshop.db.session import build_engine, init_db, make_session_factory
from tshirtshop.errors import ShopError
from tshirtshop.services.cart_service import CartService
from tshirtshop.services.catalog_service import CatalogService
from tshirtshop.services.customer_service import CustomerService
from tshirtshop.services.logging import log_event
from tshirtshop.services.order_service import OrderService
from tshirtshop.services.payment_service import PaymentService, StripeGateway
from tshirtshop.services.token_service import TokenService


logger = logging.getLogger(__name__)


def build_components(config: AppConfig, session_factory) -> dict:
    tokens = TokenService(config.secret_key, ttl_hours=config.token_ttl_hours)
    order_service = OrderService(session_factory, clear_cart_on_checkout=config.clear_cart_on_checkout)
    gateway = StripeGateway(
        config.stripe_secret_key,
        api_base=config.stripe_api_base,
        timeout=config.payment_timeout_seconds,
    )
    return {
        "tokens": tokens,
        "catalog_service": CatalogService(session_factory),
        "cart_service": CartService(session_factory),
        "order_service": order_service,
        "customer_service": CustomerService(session_factory, tokens),
        "payment_service": PaymentService(order_service, gateway, currency=config.currency),
    }


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ShopError)
    def handle_shop_error(err: ShopError):
        return jsonify({"error": err.to_dict()}), err.status

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        return jsonify({"error": {"status": err.code, "code": "HTTP_%s" % err.code, "message": err.description}}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        logger.exception("Unhandled error")
        log_event("error", "request.failed", error=type(err).__name__)
        return jsonify({"error": {"status": 500, "code": "SRV_01", "message": "Internal server error"}}), 500


def create_app(config: Optional[AppConfig] = None, session_factory=None) -> Flask:
    config = config or load_env()
    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO))

    if session_factory is None:
        engine = build_engine(config.database_url)
        init_db(engine)
        session_factory = make_session_factory(engine)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["SHOP_CONFIG"] = config
    app.extensions["shop_components"] = build_components(config, session_factory)

    app.register_blueprint(catalog.catalog_bp)
    app.register_blueprint(attributes.attributes_bp)
    app.register_blueprint(customer.customer_bp)
    app.register_blueprint(shopping_cart.cart_bp)
    _register_error_handlers(app)

    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=False)


if __name__ == "__main__":
    main()
