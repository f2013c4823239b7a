"""
Petora Backend - Application Service
=====================================

What:  Submission and listing of adoption applications.

`petId` must be a well-formed id but is not checked against the pets
collection. Listing expands it into the pet document, or null when that
pet no longer exists. Status stays at its initial value: no operation here
changes it.
"""

import logging
from typing import Any, List, Mapping

from petora.models import ApplicationDocument
from petora.schemas.application import ApplicationResponse
from petora.store import Stores
from petora.validation import require_valid

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(self, stores: Stores):
        self.stores = stores

    async def create_application(self, payload: Mapping[str, Any]) -> ApplicationResponse:
        # An omitted status defaults to Submitted
        application = require_valid(ApplicationDocument, payload)
        record = await self.stores.applications.create(application.to_document())
        logger.info("Application %s submitted for pet %s", record["_id"], record["petId"])
        return ApplicationResponse.model_validate(record)

    async def list_applications(self) -> List[ApplicationResponse]:
        records = await self.stores.applications.find(expand={"petId": self.stores.pets})
        return [ApplicationResponse.model_validate(record) for record in records]
