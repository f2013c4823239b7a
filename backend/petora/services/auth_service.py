"""
Petora Backend - Auth Service
==============================

What:  Admin registration and login.
How:   Composes the user store, CredentialService and SessionService.

Registration Flow (POST /api/auth/register):
    payload → validate UserDocument → hash password → insert into users
    - Validation failure          → ValidationError (400)
    - Email already registered    → DuplicateKeyError (400)

Login Flow (POST /api/auth/login):
    email → find user → verify password → issue token
    - Unknown email               → NotFoundError (404)
    - Password mismatch           → AuthenticationError (401)
"""

import logging
from typing import Any, Mapping

from petora.exceptions import (
    AuthenticationError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from petora.models import UserDocument
from petora.schemas.auth import LoginResponse, RegisterResponse
from petora.services.credential_service import CredentialService
from petora.services.session_service import SessionService
from petora.store import Stores
from petora.validation import require_valid

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        stores: Stores,
        credentials: CredentialService,
        sessions: SessionService,
    ):
        self.stores = stores
        self.credentials = credentials
        self.sessions = sessions

    async def register(self, payload: Mapping[str, Any]) -> RegisterResponse:
        user = require_valid(UserDocument, payload)

        document = user.to_document()
        # Hashed exactly once, here, when the account is created
        document["password"] = await self.credentials.hash(user.password)

        try:
            record = await self.stores.users.create(document)
        except DuplicateKeyError as e:
            raise DuplicateKeyError(message="Email already registered.", key="email") from e

        logger.info("Registered %s user %s", record["role"], record["_id"])
        return RegisterResponse(user_id=record["_id"])

    async def login(self, payload: Mapping[str, Any]) -> LoginResponse:
        email = payload.get("email")
        password = payload.get("password")
        if not isinstance(email, str) or not email or not isinstance(password, str) or not password:
            raise ValidationError(
                message="Email and password are required.",
                context={"fields": ["email", "password"]},
            )

        # Exact match: emails are stored as given, not case-folded
        user = await self.stores.users.find_one({"email": email})
        if user is None:
            raise NotFoundError(resource="user", message="User not found")

        if not await self.credentials.verify(password, user.get("password") or ""):
            logger.info("Login rejected for user %s: password mismatch", user["_id"])
            raise AuthenticationError("Invalid credentials")

        # Claims mirror the stored account at login time; later changes do not reach live tokens
        token = self.sessions.issue(user["_id"], user.get("role"), user.get("shelterRef"))
        logger.info("User %s logged in", user["_id"])
        return LoginResponse(token=token, role=user.get("role"))
