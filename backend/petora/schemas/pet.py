"""
Pet response model.

`shelterId` is the shelter's id on write responses and the expanded
shelter document on reads; a reference that no longer resolves is null.
"""

from typing import Optional, Union

from pydantic import Field

from petora.schemas.common import PyObjectId, RecordResponse
from petora.schemas.shelter import ShelterResponse


class PetResponse(RecordResponse):
    name: str
    species: str
    breed: Optional[str] = None
    age: Optional[Union[int, float]] = None
    gender: str
    size: str
    description: str
    image_url: str = Field(alias="imageUrl")
    status: str
    shelter_id: Optional[Union[ShelterResponse, PyObjectId]] = Field(default=None, alias="shelterId")
