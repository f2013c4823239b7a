"""Authentication responses. The password hash never appears in any of them."""

from typing import Optional

from pydantic import Field

from petora.schemas.common import PyObjectId, ResponseModel


class RegisterResponse(ResponseModel):
    message: str = "User registered successfully"
    user_id: PyObjectId = Field(alias="userId")


class LoginResponse(ResponseModel):
    token: str = Field(description="Bearer token, valid for 24 hours")
    role: str


class SessionClaims(ResponseModel):
    """Decoded bearer token as attached to the request by the access guard."""

    id: str
    role: str
    shelter_id: Optional[str] = Field(default=None, alias="shelterId")
    iat: Optional[int] = None
    exp: Optional[int] = None
