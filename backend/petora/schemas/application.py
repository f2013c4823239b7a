from typing import Optional, Union

from pydantic import Field

from petora.schemas.common import PyObjectId, RecordResponse
from petora.schemas.pet import PetResponse


class ApplicationResponse(RecordResponse):
    applicant_name: str = Field(alias="applicantName")
    applicant_email: str = Field(alias="applicantEmail")
    applicant_phone: str = Field(alias="applicantPhone")
    message: Optional[str] = None
    status: str
    # Expanded on list; null when the pet no longer exists
    pet_id: Optional[Union[PetResponse, PyObjectId]] = Field(default=None, alias="petId")
