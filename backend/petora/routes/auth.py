"""
Petora Backend - Auth Route Handlers
=====================================

What:  Admin account registration, login, and the current session.
Who:   Called by the admin dashboard.

Token usage:
    POST /api/auth/login → {"token": "...", "role": "shelter-admin"}
    Then send `Authorization: Bearer <token>` to admin-only routes.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from petora.dependencies import get_auth_service, require_admin
from petora.schemas.auth import LoginResponse, RegisterResponse, SessionClaims
from petora.schemas.common import ErrorResponse
from petora.services import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=RegisterResponse,
    responses={
        400: {"description": "Invalid fields or email already registered", "model": ErrorResponse},
    },
    summary="Register an admin account",
)
async def register(
    payload: Dict[str, Any] = Body(...),
    auth: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """
    Create a user from `email`, `password`, `shelterRef` and an optional `role`
    (defaults to shelter-admin). The password is stored as a bcrypt hash.
    """
    return await auth.register(payload)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Email or password missing", "model": ErrorResponse},
        401: {"description": "Password does not match", "model": ErrorResponse},
        404: {"description": "No user with this email", "model": ErrorResponse},
    },
    summary="Exchange credentials for a bearer token",
)
async def login(
    payload: Dict[str, Any] = Body(...),
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    return await auth.login(payload)


@router.get(
    "/me",
    response_model=SessionClaims,
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        403: {"description": "Role is not an admin role", "model": ErrorResponse},
    },
    summary="Claims of the current admin session",
)
async def me(claims: Dict[str, Any] = Depends(require_admin)) -> SessionClaims:
    return SessionClaims.model_validate(claims)
