"""Pydantic schemas for the auth API."""
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("confirm_password", "confirmPassword"),
    )


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class IdentityOut(BaseModel):
    user_id: str
    email: str

    model_config = {"from_attributes": True}


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    identity: IdentityOut


class SessionOut(BaseModel):
    identity: Optional[IdentityOut] = None
