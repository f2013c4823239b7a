"""
Petora Backend - Pet Service
=============================

What:  Listing, lookup, creation (with image), update and deletion of pets.
How:   Composes the pet and shelter stores with MediaService.
Who:   Called by the /api/pets route handlers.

Create Flow (POST /api/pets):
    ┌────────────┐    ┌──────────────┐    ┌─────────────┐    ┌───────────┐
    │ image      │───▶│ validate pet │───▶│ write image │───▶│ insert    │
    │ present &  │    │ fields +     │    │ (aiofiles)  │    │ pet       │
    │ image/*    │    │ reserved url │    └─────────────┘    └───────────┘
    └────────────┘    └──────────────┘

    The image is written before the record is inserted and the two are not
    atomic: a failed insert leaves the written file in place, a failed
    write means no record is created.

Update:
    The request body is merged over the stored pet, the merged document is
    validated, then written back in full. `imageUrl`, `_id` and the
    timestamps cannot be changed through an update.

Reads expand `shelterId` into the shelter document.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from petora.exceptions import NotFoundError, ValidationError
from petora.models import PetDocument
from petora.schemas.pet import PetResponse
from petora.services.media_service import MediaService
from petora.store import Stores
from petora.validation import require_valid

logger = logging.getLogger(__name__)

# Fields an update body may not touch
PROTECTED_FIELDS = frozenset({"_id", "imageUrl", "createdAt", "updatedAt", "__v"})


def _present(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop blank form values so they count as absent."""
    return {key: value for key, value in fields.items() if value is not None and value != ""}


class PetService:
    def __init__(self, stores: Stores, media: MediaService):
        self.stores = stores
        self.media = media

    @property
    def _expand(self):
        return {"shelterId": self.stores.shelters}

    async def list_pets(
        self,
        species: Optional[str] = None,
        size: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[PetResponse]:
        """Pets matching every given filter exactly (case-sensitive)."""
        # Absent and blank query values both mean "no filter on this field"
        filters = _present({"species": species, "size": size, "status": status})
        records = await self.stores.pets.find(filters, expand=self._expand)
        return [PetResponse.model_validate(record) for record in records]

    async def get_pet(self, pet_id: str) -> PetResponse:
        record = await self.stores.pets.find_by_id(pet_id, expand=self._expand)
        if record is None:
            raise NotFoundError(resource="pet", resource_id=pet_id)
        return PetResponse.model_validate(record)

    async def create_pet(
        self,
        fields: Mapping[str, Any],
        filename: Optional[str],
        content_type: Optional[str],
        content: Optional[bytes],
    ) -> PetResponse:
        """
        Create a pet from form fields and its uploaded image.

        Raises:
            ValidationError:  image missing or not an image, or invalid pet fields
            FileStorageError: image could not be written
            DatabaseError:    insert failed (the written image stays on disk)
        """
        if content is None:
            raise ValidationError(
                message="Image upload is required.",
                field=self.media.field_name,
            )
        self.media.validate_image(content_type, filename)

        # Name is reserved up front so the validated document carries its final imageUrl
        stored_name = self.media.reserve_name(filename)
        data = _present(fields)
        data["imageUrl"] = self.media.url_for(stored_name)
        pet = require_valid(PetDocument, data)

        # Nothing has touched disk until here: a validation failure leaves no file
        await self.media.store(stored_name, content)
        record = await self.stores.pets.create(pet.to_document())

        logger.info("Pet %s created with image %s", record["_id"], record["imageUrl"])
        return PetResponse.model_validate(record)

    async def update_pet(self, pet_id: str, changes: Mapping[str, Any]) -> PetResponse:
        existing = await self.stores.pets.find_by_id(pet_id)
        if existing is None:
            raise NotFoundError(resource="pet", resource_id=pet_id)

        merged = {k: v for k, v in existing.items() if k not in PROTECTED_FIELDS}
        # Body values win over stored ones; an expanded shelterId collapses back to its id
        merged.update({k: v for k, v in changes.items() if k not in PROTECTED_FIELDS})
        # The stored image is the only source of imageUrl
        merged["imageUrl"] = existing.get("imageUrl")
        pet = require_valid(PetDocument, merged)

        record = await self.stores.pets.replace_by_id(pet_id, pet.to_document())
        if record is None:
            # Deleted between the read and the write
            raise NotFoundError(resource="pet", resource_id=pet_id)

        logger.info("Pet %s updated", pet_id)
        return PetResponse.model_validate(record)

    async def delete_pet(self, pet_id: str) -> None:
        record = await self.stores.pets.delete_by_id(pet_id)
        if record is None:
            raise NotFoundError(resource="pet", resource_id=pet_id)
        # Applications pointing at this pet are left as they are
        logger.info("Pet %s deleted", pet_id)
