"""Shelter route handlers: POST /api/shelters and GET /api/shelters."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from petora.dependencies import get_shelter_service
from petora.schemas.common import ErrorResponse
from petora.schemas.shelter import ShelterResponse
from petora.services import ShelterService

router = APIRouter(prefix="/api/shelters", tags=["Shelters"])


@router.post(
    "",
    status_code=201,
    response_model=ShelterResponse,
    responses={400: {"description": "Invalid shelter fields", "model": ErrorResponse}},
    summary="Create a shelter",
)
async def create_shelter(
    payload: Dict[str, Any] = Body(...),
    shelters: ShelterService = Depends(get_shelter_service),
) -> ShelterResponse:
    return await shelters.create_shelter(payload)


@router.get(
    "",
    response_model=List[ShelterResponse],
    summary="List all shelters",
)
async def list_shelters(
    shelters: ShelterService = Depends(get_shelter_service),
) -> List[ShelterResponse]:
    return await shelters.list_shelters()
