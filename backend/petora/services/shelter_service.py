"""Shelter creation and listing."""

import logging
from typing import Any, List, Mapping

from petora.models import ShelterDocument
from petora.schemas.shelter import ShelterResponse
from petora.store import Stores
from petora.validation import require_valid

logger = logging.getLogger(__name__)


class ShelterService:
    def __init__(self, stores: Stores):
        self.stores = stores

    async def create_shelter(self, payload: Mapping[str, Any]) -> ShelterResponse:
        shelter = require_valid(ShelterDocument, payload)
        record = await self.stores.shelters.create(shelter.to_document())
        logger.info("Shelter %s created", record["_id"])
        return ShelterResponse.model_validate(record)

    async def list_shelters(self) -> List[ShelterResponse]:
        # Insertion order, no pagination
        records = await self.stores.shelters.find()
        return [ShelterResponse.model_validate(record) for record in records]
