"""
Stripe charge capture.

The charged amount is always read back from the persisted order; nothing the
client sends is used to compute it.
"""
import logging
from typing import Any, Dict, Optional

import requests

from ..errors import GatewayTimeout, PaymentGatewayError, ValidationError
from .logging import log_event
from .order_service import OrderService
from .pricing import to_minor_units


class StripeGateway:
    """Thin client for the Stripe charges endpoint."""

    def __init__(
        self,
        secret_key: str,
        *,
        api_base: str = "https://api.stripe.com",
        timeout: float = 10.0,
        http: Optional[requests.Session] = None,
    ) -> None:
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._http = http or requests.Session()
        self.logger = logging.getLogger(__name__)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/x-www-form-urlencoded",
            "Authorization": f"Bearer {self.secret_key}",
        }

    def charge(self, *, amount: int, currency: str, source: str, metadata: Dict[str, Any]) -> Dict:
        if not self.secret_key:
            raise PaymentGatewayError("Payment processor is not configured")
        body = {
            "amount": amount,
            "currency": currency.lower(),
            "source": source,
        }
        for key, value in (metadata or {}).items():
            body[f"metadata[{key}]"] = value

        try:
            response = self._http.post(
                f"{self.api_base}/v1/charges",
                headers=self._get_headers(),
                data=body,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise GatewayTimeout() from exc
        except requests.exceptions.RequestException as exc:
            self.logger.warning("Stripe transport error: %s", type(exc).__name__)
            raise PaymentGatewayError() from exc

        try:
            result = response.json()
        except ValueError:
            result = {}
        if response.status_code >= 400:
            error = result.get("error") if isinstance(result, dict) else None
            message = (error or {}).get("message") or f"Stripe API error: {response.status_code}"
            raise PaymentGatewayError(message)
        if not isinstance(result, dict) or not result:
            raise PaymentGatewayError("Stripe returned an unreadable response")
        return result


class PaymentService:
    def __init__(self, order_service: OrderService, gateway: StripeGateway, *, currency: str = "USD") -> None:
        self._orders = order_service
        self._gateway = gateway
        self._currency = currency

    def capture(self, *, order_id: Any, customer_id: int, email: str, payment_token: str) -> Dict:
        if not payment_token:
            raise ValidationError("stripeToken required", code="PAY_03", field="stripeToken")
        if not email:
            raise ValidationError("email required", code="PAY_04", field="email")
        total = self._orders.claim_for_payment(order_id, customer_id=customer_id)
        oid = int(order_id)
        amount = to_minor_units(total)
        try:
            result = self._gateway.charge(
                amount=amount,
                currency=self._currency,
                source=payment_token,
                metadata={"order_id": oid, "email": email},
            )
        except PaymentGatewayError as exc:
            self._orders.release_claim(oid)
            log_event("error", "payment.failed", order_id=oid, code=exc.code)
            raise
        self._orders.mark_paid(oid, reference=result.get("id"), auth_code=result.get("balance_transaction"))
        log_event("info", "payment.captured", order_id=oid, amount=amount, currency=self._currency)
        return result
