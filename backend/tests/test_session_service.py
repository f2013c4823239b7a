"""
Petora Backend - Session Service Unit Tests
============================================

Test Strategy:
    ✅ Issued tokens carry id, role, shelterId and a 24h expiry
    ✅ Tampered, foreign-secret, expired and empty tokens are rejected (401)
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from bson import ObjectId

from petora.exceptions import AuthenticationError
from petora.services.session_service import SessionService


class TestSessionService:
    def setup_method(self):
        self.service = SessionService(secret="unit-test-secret", algorithm="HS256", ttl_hours=24)

    def test_issue_and_verify_claims(self):
        user_id, shelter_id = ObjectId(), ObjectId()
        token = self.service.issue(user_id, "shelter-admin", shelter_id)

        claims = self.service.verify(token)

        assert claims["id"] == str(user_id)
        assert claims["role"] == "shelter-admin"
        assert claims["shelterId"] == str(shelter_id)

    def test_token_expires_after_ttl(self):
        claims = self.service.verify(self.service.issue(ObjectId(), "super-admin", None))
        assert claims["exp"] - claims["iat"] == 24 * 3600
        assert claims["shelterId"] is None

    def test_wrong_secret_rejected(self):
        other = SessionService(secret="someone-else", algorithm="HS256", ttl_hours=24)
        token = other.issue(ObjectId(), "super-admin", None)
        with pytest.raises(AuthenticationError, match="token failed"):
            self.service.verify(token)

    def test_tampered_token_rejected(self):
        token = self.service.issue(ObjectId(), "shelter-admin", None)
        with pytest.raises(AuthenticationError):
            self.service.verify(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))

    def test_expired_token_rejected(self):
        past = datetime.now(timezone.utc) - timedelta(hours=25)
        token = jwt.encode(
            {"id": "x", "role": "shelter-admin", "iat": past, "exp": past + timedelta(hours=1)},
            "unit-test-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError, match="expired"):
            self.service.verify(token)

    def test_empty_token_rejected(self):
        with pytest.raises(AuthenticationError, match="no token"):
            self.service.verify("")

    def test_garbage_token_rejected(self):
        with pytest.raises(AuthenticationError, match="token failed"):
            self.service.verify("not.a.jwt")

    @pytest.mark.parametrize("missing", ["exp", "id", "role"])
    def test_token_missing_required_claim_rejected(self, missing):
        now = datetime.now(timezone.utc)
        claims = {"id": "x", "role": "super-admin", "iat": now, "exp": now + timedelta(hours=1)}
        del claims[missing]
        token = jwt.encode(claims, "unit-test-secret", algorithm="HS256")

        with pytest.raises(AuthenticationError, match="token failed"):
            self.service.verify(token)
