import re
from typing import Dict, Optional
from sqlalchemy import func
from werkzeug.security import check_password_hash, generate_password_hash
from ..errors import Conflict, NotFound, Unauthorized, ValidationError
from ..models.customer import Customer
from .logging import log_event
from .token_service import TokenService


EMAIL_RE = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.[A-Za-z]{2,}$")

PHONE_FIELDS = ("day_phone", "eve_phone", "mob_phone")
PROFILE_FIELDS = ("name", "email") + PHONE_FIELDS
ADDRESS_TEXT_FIELDS = ("address_1", "address_2", "city", "region", "postal_code", "country")
ADDRESS_FIELDS = ADDRESS_TEXT_FIELDS + ("shipping_region_id",)


def _validate_email(email: str) -> str:
    v = (email or "").strip().lower()
    if not EMAIL_RE.match(v):
        raise ValidationError("The email is invalid.", code="USR_03", field="email")
    return v


def _validate_name(name: Optional[str]) -> str:
    v = (name or "").strip()
    if not v:
        raise ValidationError("The field(s) are/is required.", code="USR_02", field="name")
    if len(v) > 50:
        raise ValidationError(f"This is too long {v}.", code="USR_07", field="name")
    return v


def _optional(value) -> Optional[str]:
    """Blank or null clears an optional column."""
    if value is None:
        return None
    v = str(value).strip()
    return v or None


class CustomerService:
    """Customer accounts: registration, login and profile updates."""

    def __init__(self, session_factory, tokens: TokenService):
        self._session_factory = session_factory
        self._tokens = tokens

    def _session_payload(self, customer: Customer) -> Dict:
        credential = self._tokens.issue(customer.customer_id)
        return {
            "customer": customer.to_safe_dict(),
            "accessToken": credential.as_header(),
            "expires_in": f"{credential.expires_in // 3600}h",
        }

    @staticmethod
    def _email_taken(session, email: str, exclude_id: Optional[int] = None) -> bool:
        q = session.query(Customer.customer_id).filter(func.lower(Customer.email) == email)
        if exclude_id is not None:
            q = q.filter(Customer.customer_id != exclude_id)
        return q.first() is not None

    def register(self, *, name: str, email: str, password: str) -> Dict:
        if not email or not password or len(password) < 8:
            raise ValidationError("Email or Password is invalid", code="USR_01", field="email, password")
        name = _validate_name(name)
        email = _validate_email(email)
        with self._session_factory() as session:
            if self._email_taken(session, email):
                raise Conflict(field="email")
            customer = Customer(name=name, email=email, password=generate_password_hash(password))
            session.add(customer)
            session.flush()
            log_event("info", "customer.registered", customer_id=customer.customer_id)
            return self._session_payload(customer)

    def login(self, *, email: str, password: str) -> Dict:
        if not email or not password:
            raise ValidationError("Email or Password is invalid", code="USR_01", field="email, password")
        with self._session_factory() as session:
            customer = (
                session.query(Customer)
                .filter(func.lower(Customer.email) == email.strip().lower())
                .first()
            )
            if not customer or not check_password_hash(customer.password, password):
                raise Unauthorized("Email or Password is invalid.", code="USR_05")
            return self._session_payload(customer)

    def _get(self, session, customer_id: int) -> Customer:
        customer = session.get(Customer, int(customer_id))
        if not customer:
            raise NotFound(f"Customer with id {customer_id} does not exist", code="USR_06")
        return customer

    def get_profile(self, customer_id: int) -> Dict:
        with self._session_factory() as session:
            return self._get(session, customer_id).to_safe_dict()

    def update_profile(self, customer_id: int, fields: Dict) -> Dict:
        updates = {k: v for k, v in (fields or {}).items() if k in PROFILE_FIELDS}
        for key in PHONE_FIELDS:
            if key in updates:
                updates[key] = _optional(updates[key])
        if "name" in updates:
            updates["name"] = _validate_name(updates["name"])
        if "email" in updates:
            updates["email"] = _validate_email(updates["email"])
        with self._session_factory() as session:
            customer = self._get(session, customer_id)
            if "email" in updates and self._email_taken(session, updates["email"], exclude_id=customer.customer_id):
                raise Conflict(field="email")
            for key, value in updates.items():
                setattr(customer, key, value)
            session.flush()
            return customer.to_safe_dict()

    def update_address(self, customer_id: int, fields: Dict) -> Dict:
        updates = {k: v for k, v in (fields or {}).items() if k in ADDRESS_FIELDS}
        for key in ADDRESS_TEXT_FIELDS:
            if key in updates:
                updates[key] = _optional(updates[key])
        if "shipping_region_id" in updates:
            # not nullable; blank falls back to the default region
            if updates["shipping_region_id"] in (None, ""):
                updates["shipping_region_id"] = 1
            try:
                updates["shipping_region_id"] = int(updates["shipping_region_id"])
            except (TypeError, ValueError):
                raise ValidationError("shipping_region_id must be an integer", code="USR_09", field="shipping_region_id") from None
        with self._session_factory() as session:
            customer = self._get(session, customer_id)
            for key, value in updates.items():
                setattr(customer, key, value)
            session.flush()
            return customer.to_safe_dict()

    def update_credit_card(self, customer_id: int, credit_card: str) -> Dict:
        digits = re.sub(r"[\s-]", "", credit_card or "")
        if not digits.isdigit() or not 12 <= len(digits) <= 19:
            raise ValidationError("this is an invalid Credit Card.", code="USR_08", field="credit_card")
        with self._session_factory() as session:
            customer = self._get(session, customer_id)
            customer.credit_card = digits
            session.flush()
            return customer.to_safe_dict()
