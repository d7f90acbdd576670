from typing import Dict, Optional


class ShopError(Exception):
    """Base error surfaced to API callers as structured data."""

    status: int = 400
    code: str = "SRV_00"
    default_message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None, field: Optional[str] = None) -> None:
        self.message = message or self.default_message
        if code:
            self.code = code
        self.field = field
        super().__init__(self.message)

    def to_dict(self) -> Dict:
        body = {"status": self.status, "code": self.code, "message": self.message}
        if self.field:
            body["field"] = self.field
        return body


class ValidationError(ShopError, ValueError):
    status = 400
    code = "VAL_01"
    default_message = "Invalid input"


class Unauthorized(ShopError):
    status = 401
    code = "AUT_02"
    default_message = "Access Unauthorized"


class MissingCredential(Unauthorized):
    code = "AUT_01"
    default_message = "Authorization code is empty"


class InvalidCredential(Unauthorized):
    code = "AUT_02"
    default_message = "Access Unauthorized"


class NotFound(ShopError):
    status = 404
    code = "NTF_01"
    default_message = "Resource not found"


class Conflict(ShopError):
    status = 409
    code = "USR_04"
    default_message = "The email already exists."


class EmptyCart(ShopError):
    status = 400
    code = "CRT_02"
    default_message = "Cart is empty"


class OrderCreationFailed(ShopError):
    status = 500
    code = "ORD_01"
    default_message = "Order could not be created"


class PaymentGatewayError(ShopError):
    status = 502
    code = "PAY_01"
    default_message = "Payment processor error"


class GatewayTimeout(PaymentGatewayError):
    status = 504
    code = "PAY_02"
    default_message = "Payment processor timed out"
