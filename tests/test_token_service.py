from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tshirtshop.errors import InvalidCredential, MissingCredential, Unauthorized
from tshirtshop.services.token_service import TokenService


class TestIssue:
    def test_token_expires_24_hours_after_issue(self, tokens):
        cred = tokens.issue(7)
        assert cred.customer_id == 7
        assert cred.expires_at - cred.issued_at == timedelta(hours=24)
        assert cred.expires_in == 24 * 3600

    def test_header_round_trip(self, tokens):
        cred = tokens.issue(7)
        result = tokens.verify(cred.as_header())
        assert result.ok
        assert result.unwrap() == 7

    def test_any_scheme_prefix_is_stripped(self, tokens):
        cred = tokens.issue(3)
        assert tokens.verify(f"Token {cred.token}").customer_id == 3

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestVerify:
    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_credential(self, tokens, header):
        result = tokens.verify(header)
        assert not result.ok
        assert isinstance(result.error, MissingCredential)
        assert result.error.code == "AUT_01"

    def test_header_without_scheme_fails_cleanly(self, tokens):
        cred = tokens.issue(7)
        result = tokens.verify(cred.token)
        assert isinstance(result.error, InvalidCredential)
        assert result.customer_id is None

    def test_expired_token_rejected(self, tokens):
        issued = datetime.now(timezone.utc) - timedelta(hours=25)
        cred = tokens.issue(7, now=issued)
        result = tokens.verify(cred.as_header())
        assert not result.ok
        assert result.customer_id is None
        with pytest.raises(Unauthorized):
            result.unwrap()

    def test_tampered_token_rejected(self, tokens):
        cred = tokens.issue(7)
        header, payload, signature = cred.token.split(".")
        forged = jwt.encode({"customer_id": 1, "iat": 0, "exp": 9999999999}, "other", algorithm="HS256")
        tampered = ".".join([header, forged.split(".")[1], signature])
        result = tokens.verify(f"Bearer {tampered}")
        assert isinstance(result.error, InvalidCredential)
        assert result.customer_id is None

    def test_token_signed_with_other_key_rejected(self, tokens):
        other = TokenService("someone-else")
        result = tokens.verify(other.issue(7).as_header())
        assert result.error.code == "AUT_02"

    def test_token_without_customer_claim_rejected(self, tokens):
        raw = jwt.encode({"iat": 0, "exp": 9999999999}, "test-secret", algorithm="HS256")
        assert not tokens.verify(f"Bearer {raw}").ok

    def test_error_body_is_opaque(self, tokens):
        body = tokens.verify("Bearer not.a.jwt").error.to_dict()
        assert body == {"status": 401, "code": "AUT_02", "message": "Access Unauthorized"}
