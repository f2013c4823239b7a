"""
User document: a shelter administrator account.

`password` holds the plaintext only between validation and hashing; the
auth service swaps in the bcrypt hash before the document is written.
"""

from enum import Enum

from pydantic import Field

from petora.models.base import DocumentModel, ObjectIdField, RequiredStr


class UserRole(str, Enum):
    SHELTER_ADMIN = "shelter-admin"
    SUPER_ADMIN = "super-admin"


ADMIN_ROLES = frozenset(role.value for role in UserRole)


class UserDocument(DocumentModel):
    entity_name = "User"

    email: RequiredStr
    password: RequiredStr
    role: UserRole = UserRole.SHELTER_ADMIN
    shelter_ref: ObjectIdField = Field(alias="shelterRef")
