"""
Petora Backend - Session Issuer
================================

What:  Issues and verifies signed bearer tokens (JWT, PyJWT).
How:   HS256 by default, signed with settings.jwt_secret. Each token binds
       three claims plus standard timing claims:

           {"id": "<user id>", "role": "shelter-admin",
            "shelterId": "<shelter id>", "iat": ..., "exp": ...}

       Tokens expire after settings.token_ttl_hours (24h by default).
Who:   AuthService issues tokens at login; the access guard verifies them.

There is no revocation list: a token stays valid until it expires, whatever
happens to the account afterwards.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from petora.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# A token missing any of these is rejected as "token failed"
REQUIRED_CLAIMS = ("exp", "id", "role")


class SessionService:
    def __init__(self, secret: str, algorithm: str = "HS256", ttl_hours: int = 24):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = timedelta(hours=ttl_hours)

    def issue(self, identity: Any, role: str, shelter_ref: Any) -> str:
        issued_at = datetime.now(timezone.utc)
        payload = {
            "id": str(identity),
            "role": role,
            "shelterId": str(shelter_ref) if shelter_ref is not None else None,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Decoded claims of a valid token.

        Raises:
            AuthenticationError: empty, malformed, wrongly-signed or expired token
        """
        if not token:
            raise AuthenticationError("Not authorized, no token")
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired session token")
            raise AuthenticationError("Not authorized, token expired") from e
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid session token: %s", type(e).__name__)
            raise AuthenticationError("Not authorized, token failed") from e
