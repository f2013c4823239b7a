"""
Petora Backend - Route Dependencies & Access Guard
===================================================

What:  FastAPI dependencies that hand route handlers their services, plus
       the access guard for admin-only routes.
How:   Services live on `app.state.services` (built by the application
       factory); the accessors below read them from the current request.

Access Guard:
    require_session  → needs `Authorization: Bearer <token>`
                       missing header / bad or expired token → 401
    require_admin    → require_session + role in {shelter-admin, super-admin}
                       other role → 403

    On success the decoded claims are stored on `request.state.user` and
    returned to the handler. The check is pure CPU: no store lookup.

Usage:
    @router.get("/me")
    async def me(claims: dict = Depends(require_admin)): ...
"""

from typing import Any, Dict

from fastapi import Depends, Request

from petora.database import MongoDatabase
from petora.exceptions import AuthenticationError, AuthorizationError
from petora.models.user import ADMIN_ROLES
from petora.services import (
    ApplicationService,
    AuthService,
    PetService,
    Services,
    ShelterService,
)


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_database(request: Request) -> MongoDatabase:
    return request.app.state.database


def get_auth_service(services: Services = Depends(get_services)) -> AuthService:
    return services.auth


def get_shelter_service(services: Services = Depends(get_services)) -> ShelterService:
    return services.shelters


def get_pet_service(services: Services = Depends(get_services)) -> PetService:
    return services.pets


def get_application_service(services: Services = Depends(get_services)) -> ApplicationService:
    return services.applications


def _bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer"):
        raise AuthenticationError("Not authorized, no token")
    parts = header.split(" ", 1)
    token = parts[1].strip() if len(parts) == 2 else ""
    if not token:
        raise AuthenticationError("Not authorized, token failed")
    return token


async def require_session(
    request: Request,
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    claims = services.sessions.verify(_bearer_token(request))
    request.state.user = claims
    return claims


async def require_admin(claims: Dict[str, Any] = Depends(require_session)) -> Dict[str, Any]:
    if claims.get("role") not in ADMIN_ROLES:
        raise AuthorizationError("Not authorized as an admin")
    return claims
