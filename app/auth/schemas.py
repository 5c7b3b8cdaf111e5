import uuid

from pydantic import BaseModel, Field, field_validator


class Credentials(BaseModel):
    # Stored exactly as given; no format check or case folding.
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("email must not be blank")
        return v


class RegisterRequest(Credentials):
    pass


class LoginRequest(Credentials):
    pass


class UserResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: uuid.UUID
    email: str


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


class MeResponse(BaseModel):
    user: UserResponse
