from typing import Optional

from pydantic import Field

from petora.schemas.common import RecordResponse


class ShelterResponse(RecordResponse):
    name: str
    location: str
    contact_email: Optional[str] = Field(default=None, alias="contactEmail")
    contact_phone: Optional[str] = Field(default=None, alias="contactPhone")
