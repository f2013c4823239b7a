"""
Shared building blocks for document models.

`ObjectIdField` accepts an ObjectId, its 24-hex string form, or an expanded
document carrying an `_id`, and always yields an ObjectId, so references
are stored the way MongoDB expects.
`RequiredStr` rejects the empty string as well as a missing value.
"""

from typing import Annotated, Any, ClassVar, Dict, Mapping

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, StringConstraints


def coerce_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    # An expanded reference (as returned by reads) stands for its own _id
    if isinstance(value, Mapping) and "_id" in value:
        return coerce_object_id(value["_id"])
    raise ValueError("must be a 24-character hex ObjectId")


ObjectIdField = Annotated[
    ObjectId,
    BeforeValidator(coerce_object_id),
    PlainSerializer(str, return_type=str, when_used="json"),
]

RequiredStr = Annotated[str, StringConstraints(min_length=1)]


class DocumentModel(BaseModel):
    """Base for all stored documents."""

    entity_name: ClassVar[str] = "Document"

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )

    def to_document(self) -> Dict[str, Any]:
        """Field values keyed by their stored (camelCase) names."""
        return self.model_dump(by_alias=True)
