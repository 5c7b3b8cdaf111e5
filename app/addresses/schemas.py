import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class AddressCreate(BaseModel):
    address: str
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    @field_validator("address")
    @classmethod
    def address_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("address must not be blank")
        return v


class AddressResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: uuid.UUID
    user_id: uuid.UUID
    address: str
    lat: float
    lng: float
    created_at: datetime


class AddressEnvelope(BaseModel):
    address: AddressResponse


class AddressListResponse(BaseModel):
    addresses: list[AddressResponse]


class MessageResponse(BaseModel):
    message: str
