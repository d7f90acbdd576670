"""Signed customer credentials (JWT, HS256)."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..errors import InvalidCredential, MissingCredential, Unauthorized
from .logging import log_event


@dataclass(frozen=True)
class Credential:
    token: str
    customer_id: int
    issued_at: datetime
    expires_at: datetime

    @property
    def expires_in(self) -> int:
        return int((self.expires_at - self.issued_at).total_seconds())

    def as_header(self, scheme: str = "Bearer") -> str:
        return f"{scheme} {self.token}"


@dataclass(frozen=True)
class AuthResult:
    customer_id: Optional[int] = None
    error: Optional[Unauthorized] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> int:
        if self.error is not None:
            raise self.error
        return self.customer_id


class TokenService:
    ALGORITHM = "HS256"

    def __init__(self, secret_key: str, ttl_hours: int = 24) -> None:
        if not secret_key:
            raise ValueError("secret_key required")
        self._secret_key = secret_key
        self._ttl = timedelta(hours=ttl_hours)

    def issue(self, customer_id: int, *, now: Optional[datetime] = None) -> Credential:
        issued_at = (now or datetime.now(timezone.utc)).replace(microsecond=0)
        expires_at = issued_at + self._ttl
        payload = {
            "customer_id": int(customer_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
        return Credential(token=token, customer_id=int(customer_id), issued_at=issued_at, expires_at=expires_at)

    def verify(self, raw_header: Optional[str]) -> AuthResult:
        """Check a ``"<scheme> <token>"`` header value.

        Never raises for bad input; the failure is carried in the result.
        """
        if raw_header is None or not str(raw_header).strip():
            return AuthResult(error=MissingCredential())
        parts = str(raw_header).strip().split(None, 1)
        if len(parts) != 2 or not parts[1].strip():
            log_event("warning", "auth.rejected", reason="malformed_header")
            return AuthResult(error=InvalidCredential())
        try:
            claims = jwt.decode(
                parts[1].strip(),
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp", "iat", "customer_id"]},
            )
            customer_id = int(claims["customer_id"])
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            log_event("warning", "auth.rejected", reason=type(exc).__name__)
            return AuthResult(error=InvalidCredential())
        return AuthResult(customer_id=customer_id)
