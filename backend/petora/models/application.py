"""Application document: an adoption request for a single pet."""

from enum import Enum
from typing import Optional

from pydantic import Field

from petora.models.base import DocumentModel, ObjectIdField, RequiredStr


class ApplicationStatus(str, Enum):
    SUBMITTED = "Submitted"
    IN_REVIEW = "In-Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ApplicationDocument(DocumentModel):
    entity_name = "Application"

    applicant_name: RequiredStr = Field(alias="applicantName")
    applicant_email: RequiredStr = Field(alias="applicantEmail")
    applicant_phone: RequiredStr = Field(alias="applicantPhone")
    message: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.SUBMITTED
    # Not checked against the pets collection
    pet_id: ObjectIdField = Field(alias="petId")
