"""Shelter document: an organisation that houses pets and employs admin users."""

from typing import Optional

from pydantic import Field

from petora.models.base import DocumentModel, RequiredStr


class ShelterDocument(DocumentModel):
    entity_name = "Shelter"

    name: RequiredStr
    location: RequiredStr
    contact_email: Optional[str] = Field(default=None, alias="contactEmail")
    contact_phone: Optional[str] = Field(default=None, alias="contactPhone")
