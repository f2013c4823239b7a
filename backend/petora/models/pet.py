"""
Pet document: an animal listed for adoption.

`imageUrl` is required but never taken from client input; the pet service
fills it with the path assigned by the media service.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import Field

from petora.models.base import DocumentModel, ObjectIdField, RequiredStr


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"


class PetSize(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class PetStatus(str, Enum):
    AVAILABLE = "Available"
    PENDING = "Pending"
    ADOPTED = "Adopted"


class PetDocument(DocumentModel):
    entity_name = "Pet"

    name: RequiredStr
    species: RequiredStr
    breed: Optional[str] = None
    age: Optional[Union[int, float]] = None
    gender: Gender = Gender.UNKNOWN
    size: PetSize = PetSize.MEDIUM
    description: RequiredStr
    image_url: RequiredStr = Field(alias="imageUrl")
    status: PetStatus = PetStatus.AVAILABLE
    shelter_id: Optional[ObjectIdField] = Field(default=None, alias="shelterId")
