"""Unit tests for the JWT token service."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from praytogether.infrastructure.auth import (
    InvalidClaimsError,
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
    TokenManager,
    TokenSigningError,
    TokenType,
)

SECRET = "unit-test-secret-" + "0123456789abcdef" * 4
ISSUER = "pray-together-api"


@pytest.fixture
def service() -> JWTService:
    return JWTService(
        secret_key=SECRET,
        issuer=ISSUER,
        access_token_ttl=timedelta(days=1),
        refresh_token_ttl=timedelta(days=7),
    )


def _encode(payload: dict, secret: str = SECRET, algorithm: str = "HS256") -> str:
    return jwt.encode(payload, secret, algorithm=algorithm)


def _payload(**overrides) -> dict:
    now = datetime.now(timezone.utc)
    payload = {
        "iss": ISSUER,
        "sub": "42",
        "iat": now,
        "exp": now + timedelta(hours=1),
        "member_id": "42",
        "email": "member@example.com",
        "token_type": "access",
    }
    payload.update(overrides)
    return payload


class TestIssueAndValidate:
    def test_access_token_round_trip(self, service):
        token = service.issue_access_token("42", "member@example.com")

        claims = service.validate(token)

        assert claims.member_id == "42"
        assert claims.email == "member@example.com"
        assert claims.token_type == TokenType.ACCESS
        assert claims.issuer == ISSUER

    def test_refresh_token_round_trip(self, service):
        token = service.issue_refresh_token("42", "member@example.com")

        claims = service.validate(token, expected_type=TokenType.REFRESH)

        assert claims.token_type == TokenType.REFRESH

    def test_access_token_lifetime(self, service):
        claims = service.validate(service.issue_access_token("42", "member@example.com"))
        assert claims.expires_at - claims.issued_at == timedelta(days=1)

    def test_refresh_token_outlives_access_token(self, service):
        access = service.validate(service.issue_access_token("42", "m@example.com"))
        refresh = service.validate(service.issue_refresh_token("42", "m@example.com"))

        assert refresh.expires_at > access.expires_at

    def test_signed_with_hs256(self, service):
        token = service.issue_access_token("42", "member@example.com")
        assert jwt.get_unverified_header(token)["alg"] == "HS256"

    def test_subject_matches_member_id(self, service):
        token = service.issue_access_token("42", "member@example.com")
        payload = jwt.decode(token, SECRET, algorithms=["HS256"], issuer=ISSUER)
        assert payload["sub"] == "42"

    def test_satisfies_token_manager_protocol(self, service):
        manager: TokenManager = service
        assert manager.validate(manager.issue_access_token("1", "a@b.com")).member_id == "1"

    def test_uses_injected_clock(self):
        fixed = datetime(2026, 1, 1, tzinfo=timezone.utc)
        service = JWTService(
            secret_key=SECRET,
            issuer=ISSUER,
            access_token_ttl=timedelta(days=36500),
            refresh_token_ttl=timedelta(days=36501),
            clock=lambda: fixed,
        )

        claims = service.validate(service.issue_access_token("1", "a@b.com"))

        assert claims.issued_at == fixed


class TestRejection:
    def test_expired_token(self):
        service = JWTService(
            secret_key=SECRET,
            issuer=ISSUER,
            access_token_ttl=timedelta(seconds=-10),
            refresh_token_ttl=timedelta(days=7),
        )
        token = service.issue_access_token("42", "member@example.com")

        with pytest.raises(TokenExpiredError):
            service.validate(token)

    def test_tampered_payload(self, service):
        token = service.issue_access_token("42", "member@example.com")
        header, payload, signature = token.split(".")
        forged_payload = jwt.utils.base64url_encode(
            jwt.utils.base64url_decode(payload).replace(b'"42"', b'"43"')
        ).decode()

        with pytest.raises(InvalidTokenError):
            service.validate(f"{header}.{forged_payload}.{signature}")

    def test_tampered_signature(self, service):
        token = service.issue_access_token("42", "member@example.com")
        header, payload, signature = token.split(".")
        # The last character only carries padding bits, so change one in the middle
        flipped = "A" if signature[10] != "A" else "B"
        forged_signature = signature[:10] + flipped + signature[11:]

        with pytest.raises(InvalidTokenError):
            service.validate(f"{header}.{payload}.{forged_signature}")

    def test_wrong_secret(self, service):
        token = _encode(_payload(), secret="another-secret-" + "fedcba9876543210" * 4)

        with pytest.raises(InvalidTokenError):
            service.validate(token)

    def test_other_hmac_algorithm_rejected(self, service):
        token = _encode(_payload(), algorithm="HS512")

        with pytest.raises(InvalidTokenError):
            service.validate(token)

    def test_none_algorithm_rejected(self, service):
        token = jwt.encode(_payload(), None, algorithm="none")

        with pytest.raises(InvalidTokenError):
            service.validate(token)

    def test_malformed_token(self, service):
        with pytest.raises(InvalidTokenError):
            service.validate("not.a.token")

    def test_wrong_issuer(self, service):
        with pytest.raises(InvalidTokenError):
            service.validate(_encode(_payload(iss="someone-else")))

    def test_wrong_token_type(self, service):
        token = service.issue_refresh_token("42", "member@example.com")

        with pytest.raises(InvalidTokenError):
            service.validate(token, expected_type=TokenType.ACCESS)

    def test_missing_required_claim(self, service):
        payload = _payload()
        del payload["sub"]

        with pytest.raises(InvalidClaimsError):
            service.validate(_encode(payload))

    def test_missing_member_id_claim(self, service):
        payload = _payload()
        del payload["member_id"]

        with pytest.raises(InvalidClaimsError):
            service.validate(_encode(payload))

    def test_unknown_token_type(self, service):
        with pytest.raises(InvalidClaimsError):
            service.validate(_encode(_payload(token_type="session")))

    def test_member_id_must_match_subject(self, service):
        with pytest.raises(InvalidClaimsError):
            service.validate(_encode(_payload(member_id="7")))


def test_signing_failure_raises_token_signing_error():
    service = JWTService(
        secret_key=None,
        issuer=ISSUER,
        access_token_ttl=timedelta(days=1),
        refresh_token_ttl=timedelta(days=7),
    )

    with pytest.raises(TokenSigningError):
        service.issue_access_token("42", "member@example.com")
