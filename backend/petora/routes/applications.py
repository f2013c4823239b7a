"""
Petora Backend - Adoption Application Route Handlers
=====================================================

What:  Public submission of adoption applications and their listing.

POST /api/applications does not check that `petId` names an existing pet.
GET /api/applications returns every application with `petId` expanded to
the pet record (null once that pet is gone).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from petora.dependencies import get_application_service
from petora.schemas.application import ApplicationResponse
from petora.schemas.common import ErrorResponse
from petora.services import ApplicationService

router = APIRouter(prefix="/api/applications", tags=["Applications"])


@router.post(
    "",
    status_code=201,
    response_model=ApplicationResponse,
    responses={400: {"description": "Invalid application fields", "model": ErrorResponse}},
    summary="Submit an adoption application",
)
async def create_application(
    payload: Dict[str, Any] = Body(...),
    applications: ApplicationService = Depends(get_application_service),
) -> ApplicationResponse:
    return await applications.create_application(payload)


@router.get(
    "",
    response_model=List[ApplicationResponse],
    summary="List all applications with their pets",
)
async def list_applications(
    applications: ApplicationService = Depends(get_application_service),
) -> List[ApplicationResponse]:
    return await applications.list_applications()
