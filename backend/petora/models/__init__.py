"""
Petora Backend - Document Models
=================================

What:  Pydantic models describing the stored shape of each collection.
How:   Field constraints (required, enums, reference format) are declared
       here and checked by `petora.validation.validate_document` before any
       write reaches MongoDB.

Models:
    ShelterDocument      → shelters
    UserDocument         → users
    PetDocument          → pets
    ApplicationDocument  → applications
"""

from petora.models.application import ApplicationDocument, ApplicationStatus
from petora.models.pet import Gender, PetDocument, PetSize, PetStatus
from petora.models.shelter import ShelterDocument
from petora.models.user import UserDocument, UserRole

__all__ = [
    "ApplicationDocument",
    "ApplicationStatus",
    "Gender",
    "PetDocument",
    "PetSize",
    "PetStatus",
    "ShelterDocument",
    "UserDocument",
    "UserRole",
]
