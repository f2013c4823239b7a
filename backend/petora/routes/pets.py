"""
Petora Backend - Pet Route Handlers
====================================

What:  Browse, create (with image upload), update and delete pets.
Who:   Listing and detail are used by the public site; create / update /
       delete by the admin dashboard. None of them require a token.

Create Request (multipart/form-data):
    name, species, description   required
    breed, age, gender, size,
    status, shelterId            optional
    image                        required file, any image/* type

    Blank form values count as absent, so defaults apply
    (gender=Unknown, size=Medium, status=Available).

Update Request (JSON):
    Any subset of pet fields. The body is merged over the stored pet; the
    image cannot be replaced through this route.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, Query, UploadFile

from petora.dependencies import get_pet_service
from petora.schemas.common import ErrorResponse, MessageResponse
from petora.schemas.pet import PetResponse
from petora.services import PetService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pets", tags=["Pets"])


@router.get(
    "",
    response_model=List[PetResponse],
    summary="List pets, optionally filtered",
    description="Filters are exact, case-sensitive matches and are combined with AND.",
)
async def list_pets(
    species: Optional[str] = Query(default=None, description="e.g. Dog"),
    size: Optional[str] = Query(default=None, description="Small, Medium or Large"),
    status: Optional[str] = Query(default=None, description="Available, Pending or Adopted"),
    pets: PetService = Depends(get_pet_service),
) -> List[PetResponse]:
    return await pets.list_pets(species=species, size=size, status=status)


@router.get(
    "/{pet_id}",
    response_model=PetResponse,
    responses={404: {"description": "Pet not found", "model": ErrorResponse}},
    summary="Get a single pet",
)
async def get_pet(
    pet_id: str,
    pets: PetService = Depends(get_pet_service),
) -> PetResponse:
    return await pets.get_pet(pet_id)


@router.post(
    "",
    status_code=201,
    response_model=PetResponse,
    responses={
        400: {"description": "Missing or non-image upload, or invalid fields", "model": ErrorResponse},
        500: {"description": "Image could not be stored", "model": ErrorResponse},
    },
    summary="Create a pet with its image",
)
async def create_pet(
    name: Optional[str] = Form(default=None),
    species: Optional[str] = Form(default=None),
    breed: Optional[str] = Form(default=None),
    age: Optional[str] = Form(default=None),
    gender: Optional[str] = Form(default=None),
    size: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    status: Optional[str] = Form(default=None),
    shelter_id: Optional[str] = Form(default=None, alias="shelterId"),
    image: Optional[UploadFile] = File(default=None),
    pets: PetService = Depends(get_pet_service),
) -> PetResponse:
    """
    Fields arrive as form strings; typing (age, enums, shelterId) is done by
    the pet document validation inside the service.
    """
    fields = {
        "name": name,
        "species": species,
        "breed": breed,
        "age": age,
        "gender": gender,
        "size": size,
        "description": description,
        "status": status,
        "shelterId": shelter_id,
    }

    # An absent file part arrives as None; the service turns that into a 400
    content = None
    filename = None
    content_type = None
    if image is not None:
        content = await image.read()
        filename = image.filename
        content_type = image.content_type

    return await pets.create_pet(
        fields=fields,
        filename=filename,
        content_type=content_type,
        content=content,
    )


@router.put(
    "/{pet_id}",
    response_model=PetResponse,
    responses={
        400: {"description": "Merged pet is invalid", "model": ErrorResponse},
        404: {"description": "Pet not found", "model": ErrorResponse},
    },
    summary="Update a pet",
)
async def update_pet(
    pet_id: str,
    changes: Dict[str, Any] = Body(...),
    pets: PetService = Depends(get_pet_service),
) -> PetResponse:
    return await pets.update_pet(pet_id, changes)


@router.delete(
    "/{pet_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Pet not found", "model": ErrorResponse}},
    summary="Delete a pet",
)
async def delete_pet(
    pet_id: str,
    pets: PetService = Depends(get_pet_service),
) -> MessageResponse:
    await pets.delete_pet(pet_id)
    return MessageResponse(message="Pet deleted successfully.")
