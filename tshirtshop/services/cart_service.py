from typing import Any, Dict, List
from uuid import uuid4
from ..errors import NotFound, ValidationError
from ..models.product import Product
from ..models.cart_item import CartItem
from .logging import log_event
from .pricing import price_line, round_money


# upper bound of the INTEGER quantity column
MAX_QUANTITY = 2**31 - 1


def coerce_quantity(value: Any) -> int:
    """Quantities are positive integers up to MAX_QUANTITY; numeric strings are accepted."""
    if isinstance(value, bool):
        raise ValidationError("quantity must be a positive integer", code="CRT_01", field="quantity")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("quantity must be a positive integer", code="CRT_01", field="quantity")
        value = int(value)
    try:
        qnty = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError("quantity must be a positive integer", code="CRT_01", field="quantity") from None
    if qnty <= 0:
        raise ValidationError("quantity must be > 0", code="CRT_01", field="quantity")
    if qnty > MAX_QUANTITY:
        raise ValidationError(f"quantity must be <= {MAX_QUANTITY}", code="CRT_01", field="quantity")
    return qnty


def _active(query):
    """Lines not yet converted into an order."""
    return query.filter(CartItem.order_id.is_(None))


def _require_cart_id(cart_id: Any) -> str:
    cid = str(cart_id or "").strip()
    if not cid or len(cid) > 32:
        raise ValidationError("cart_id required (max 32 chars)", code="CRT_03", field="cart_id")
    return cid


class CartService:
    """Cart operations backed by DB."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    @staticmethod
    def generate_cart_id() -> str:
        return uuid4().hex

    @staticmethod
    def _line_dto(it: CartItem) -> Dict:
        prod = it.product
        priced = price_line(prod, it.quantity, it.attributes)
        return {
            "item_id": it.item_id,
            "cart_id": it.cart_id,
            "product_id": prod.product_id,
            "name": prod.name,
            "attributes": it.attributes,
            "image": prod.image,
            "price": f"{round_money(prod.price)}",
            "discounted_price": f"{round_money(prod.discounted_price)}",
            "quantity": it.quantity,
            "unit_cost": f"{round_money(priced.unit_cost)}",
            "subtotal": f"{round_money(priced.line_subtotal)}",
        }

    def list_items(self, cart_id: str) -> List[Dict]:
        cid = _require_cart_id(cart_id)
        with self._session_factory() as session:
            rows = (
                _active(session.query(CartItem))
                .filter(CartItem.cart_id == cid)
                .order_by(CartItem.item_id)
                .all()
            )
            return [self._line_dto(it) for it in rows]

    def add_item(self, *, cart_id: str, product_id: Any, attributes: str = "", quantity: Any = 1) -> Dict:
        cid = _require_cart_id(cart_id)
        qnty = coerce_quantity(quantity)
        try:
            pid = int(product_id)
        except (TypeError, ValueError):
            raise ValidationError("product_id must be an integer", code="CRT_04", field="product_id") from None
        with self._session_factory() as session:
            prod = session.get(Product, pid)
            if not prod:
                raise NotFound(f"Product with id {pid} does not exist", code="PRO_01")

            # merge with an existing line for the same product in this cart
            existing = (
                _active(session.query(CartItem))
                .filter(CartItem.cart_id == cid, CartItem.product_id == pid)
                .first()
            )
            if existing:
                if existing.quantity + qnty > MAX_QUANTITY:
                    raise ValidationError(
                        f"quantity must be <= {MAX_QUANTITY}", code="CRT_01", field="quantity"
                    )
                existing.quantity = existing.quantity + qnty
                item = existing
            else:
                item = CartItem(
                    cart_id=cid,
                    product_id=pid,
                    attributes=attributes or "",
                    quantity=qnty,
                )
                session.add(item)
            session.flush()
            log_event("info", "cart.item_added", cart_id=cid, product_id=pid, quantity=item.quantity, merged=bool(existing))
            return item.to_dict()

    def update_quantity(self, item_id: Any, quantity: Any) -> Dict:
        qnty = coerce_quantity(quantity)
        with self._session_factory() as session:
            it = session.get(CartItem, _as_item_id(item_id))
            if not it or it.order_id is not None:
                raise NotFound(f"Cart item with id {item_id} does not exist", code="CRT_05")
            it.quantity = qnty
            session.flush()
            return it.to_dict()

    def remove_item(self, item_id: Any) -> int:
        with self._session_factory() as session:
            removed = (
                _active(session.query(CartItem))
                .filter(CartItem.item_id == _as_item_id(item_id))
                .delete(synchronize_session=False)
            )
        return removed

    def clear_cart(self, cart_id: str) -> int:
        cid = _require_cart_id(cart_id)
        with self._session_factory() as session:
            removed = (
                _active(session.query(CartItem))
                .filter(CartItem.cart_id == cid)
                .delete(synchronize_session=False)
            )
            if removed == 0:
                raise NotFound(f"cart_id {cid} does not exist", code="CRT_06")
        log_event("info", "cart.cleared", cart_id=cid, removed=removed)
        return removed


def _as_item_id(item_id: Any) -> int:
    try:
        return int(item_id)
    except (TypeError, ValueError):
        raise ValidationError("item_id must be an integer", code="CRT_07", field="item_id") from None
