from fastapi import APIRouter, Response, status

from app.addresses import service as address_service
from app.addresses.schemas import (
    AddressCreate,
    AddressEnvelope,
    AddressListResponse,
    AddressResponse,
    MessageResponse,
)
from app.core.dependencies import CurrentUser, DbSession

router = APIRouter(prefix="/api/addresses", tags=["addresses"])


@router.get("", response_model=AddressListResponse)
async def list_addresses(user: CurrentUser, db: DbSession) -> AddressListResponse:
    rows = await address_service.list_addresses(db, user.id)
    return AddressListResponse(addresses=[AddressResponse.model_validate(r) for r in rows])


@router.post("", response_model=AddressEnvelope, status_code=201)
async def save_address(
    body: AddressCreate, user: CurrentUser, db: DbSession, response: Response
) -> AddressEnvelope:
    row, created = await address_service.upsert_address(
        db, user_id=user.id, address=body.address, lat=body.lat, lng=body.lng
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return AddressEnvelope(address=AddressResponse.model_validate(row))


@router.delete("/{address_id}", response_model=MessageResponse)
async def delete_address(address_id: str, user: CurrentUser, db: DbSession) -> MessageResponse:
    await address_service.delete_address(db, user_id=user.id, address_id=address_id)
    return MessageResponse(message="Address deleted")
