from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import joinedload
from ..errors import Conflict, EmptyCart, NotFound, OrderCreationFailed, ShopError, ValidationError
from ..models.cart_item import CartItem
from ..models.order import Order, OrderDetail
from .cart_service import _active, _require_cart_id
from .logging import log_event
from .pricing import PricedLine, price_cart, round_money


ORDER_META_FIELDS = ("shipping_id", "tax_id", "comments", "shipping_address")

STATUS_PENDING = "pending"
STATUS_PROCESSING = "processing"
STATUS_PAID = "paid"


class OrderService:
    """Order creation and retrieval backed by DB.

    ``create_order`` runs inside one unit of work: the cart rows are locked,
    priced, turned into an Order plus its OrderDetail snapshots and then
    deleted, or tagged with the order id when clearing is disabled. Either way
    a cart converts once. Any failure rolls all of it back.
    """

    def __init__(self, session_factory, *, clear_cart_on_checkout: bool = True):
        self._session_factory = session_factory
        self._clear_cart = clear_cart_on_checkout

    @staticmethod
    def _order_fields(meta: Optional[Dict]) -> Dict:
        fields = {k: (meta or {}).get(k) for k in ORDER_META_FIELDS if (meta or {}).get(k) not in (None, "")}
        for key in ("shipping_id", "tax_id"):
            if key in fields:
                try:
                    fields[key] = int(fields[key])
                except (TypeError, ValueError):
                    raise ValidationError(f"{key} must be an integer", code="ORD_02", field=key) from None
        return fields

    @staticmethod
    def _build_detail(order: Order, line: PricedLine) -> OrderDetail:
        return OrderDetail(
            order_id=order.order_id,
            product_id=line.product_id,
            attributes=line.attributes,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_cost=line.unit_cost,
        )

    def _persist_details(self, session, order: Order, lines: Iterable[PricedLine]) -> int:
        count = 0
        for line in lines:
            session.add(self._build_detail(order, line))
            count += 1
        session.flush()
        return count

    def create_order(self, *, cart_id: str, customer_id: int, meta: Optional[Dict] = None) -> int:
        """Convert the cart into an order and return the new ``order_id``."""
        cid = _require_cart_id(cart_id)
        fields = self._order_fields(meta)
        try:
            with self._session_factory() as session:
                items = (
                    _active(session.query(CartItem))
                    .options(joinedload(CartItem.product, innerjoin=True))
                    .filter(CartItem.cart_id == cid)
                    .order_by(CartItem.item_id)
                    .with_for_update(of=CartItem)
                    .all()
                )
                if not items:
                    raise EmptyCart(f"Cart {cid} has no items")
                priced = price_cart(items)

                order = Order(
                    customer_id=int(customer_id),
                    total_amount=round_money(priced.total_amount),
                    status=STATUS_PENDING,
                    **fields,
                )
                session.add(order)
                session.flush()

                detail_count = self._persist_details(session, order, priced.lines)
                for it in items:
                    if self._clear_cart:
                        session.delete(it)
                    else:
                        it.order_id = order.order_id
                session.flush()
                order_id = order.order_id
        except ShopError:
            raise
        except Exception as exc:
            log_event("error", "order.failed", cart_id=cid, customer_id=customer_id, error=type(exc).__name__)
            raise OrderCreationFailed() from exc
        log_event(
            "info",
            "order.created",
            order_id=order_id,
            customer_id=customer_id,
            items=detail_count,
            total_amount=str(round_money(priced.total_amount)),
        )
        return order_id

    def _load(self, session, order_id: Any, customer_id: Optional[int]) -> Order:
        try:
            oid = int(order_id)
        except (TypeError, ValueError):
            raise ValidationError("order_id must be an integer", code="ORD_03", field="order_id") from None
        o = session.get(Order, oid)
        # other customers' orders are reported as missing
        if not o or (customer_id is not None and o.customer_id != int(customer_id)):
            raise NotFound(f"Order with id {oid} does not exist", code="ORD_04")
        return o

    def get_order(self, order_id: Any, *, customer_id: Optional[int] = None) -> Dict:
        with self._session_factory() as session:
            o = self._load(session, order_id, customer_id)
            data = o.to_dict()
            data["order_items"] = [d.to_dict() for d in o.details]
            return data

    def get_order_summary(self, order_id: Any, *, customer_id: Optional[int] = None) -> Dict:
        with self._session_factory() as session:
            return self._load(session, order_id, customer_id).to_dict()

    def get_customer_orders(self, customer_id: int) -> List[Dict]:
        with self._session_factory() as session:
            rows = (
                session.query(Order)
                .filter(Order.customer_id == int(customer_id))
                .order_by(Order.order_id)
                .all()
            )
            return [o.to_dict() for o in rows]

    def claim_for_payment(self, order_id: Any, *, customer_id: int) -> Decimal:
        """Move an unpaid order owned by ``customer_id`` to ``processing``.

        Returns the persisted total. The status switch is a conditional
        UPDATE, so of two concurrent captures only one gets the claim.
        """
        with self._session_factory() as session:
            o = self._load(session, order_id, customer_id)
            claimed = (
                session.query(Order)
                .filter(Order.order_id == o.order_id, Order.status == STATUS_PENDING)
                .update({Order.status: STATUS_PROCESSING}, synchronize_session=False)
            )
            if not claimed:
                if o.status == STATUS_PAID:
                    raise ValidationError(f"Order {o.order_id} is already paid", code="ORD_05", field="order_id")
                raise Conflict(f"Payment for order {o.order_id} is already in progress", code="ORD_06")
            return round_money(o.total_amount)

    def release_claim(self, order_id: int) -> None:
        """Put a ``processing`` order back to ``pending`` after a failed charge."""
        with self._session_factory() as session:
            (
                session.query(Order)
                .filter(Order.order_id == int(order_id), Order.status == STATUS_PROCESSING)
                .update({Order.status: STATUS_PENDING}, synchronize_session=False)
            )

    def mark_paid(self, order_id: int, *, reference: Optional[str], auth_code: Optional[str] = None) -> None:
        with self._session_factory() as session:
            o = self._load(session, order_id, None)
            o.status = STATUS_PAID
            o.reference = reference
            o.auth_code = auth_code
