"""
Address history service.

Rules:
- One row per (user, lat, lng); coordinates are matched by exact equality.
- A repeat visit overwrites the label and refreshes the timestamp.
- The dedup is a single INSERT ... ON CONFLICT DO UPDATE against the
  (user_id, lat, lng) unique constraint, so concurrent identical requests
  cannot create duplicate rows.
- Rows owned by another user are reported exactly like missing rows.
"""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.addresses.models import Address
from app.core.exceptions import NotFoundError
from app.db.base import utcnow

logger = logging.getLogger(__name__)

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _insert_for(db: AsyncSession):
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect]
    except KeyError:
        raise RuntimeError(f"Address upsert is not supported on dialect {dialect!r}")


async def list_addresses(db: AsyncSession, user_id: uuid.UUID) -> list[Address]:
    """All of a user's addresses, most recently touched first."""
    result = await db.execute(
        select(Address)
        .where(Address.user_id == user_id)
        .order_by(Address.created_at.desc(), Address.id)
    )
    return list(result.scalars().all())


async def upsert_address(
    db: AsyncSession,
    user_id: uuid.UUID,
    address: str,
    lat: float,
    lng: float,
) -> tuple[Address, bool]:
    """
    Insert a new address or refresh the existing one at the same coordinates.
    Returns (row, created).
    """
    new_id = uuid.uuid4()
    insert = _insert_for(db)
    stmt = insert(Address).values(
        id=new_id,
        user_id=user_id,
        address=address,
        lat=lat,
        lng=lng,
        created_at=utcnow(),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Address.user_id, Address.lat, Address.lng],
        set_={
            "address": stmt.excluded.address,
            "created_at": stmt.excluded.created_at,
        },
    ).returning(Address)

    result = await db.execute(stmt, execution_options={"populate_existing": True})
    row = result.scalar_one()
    await db.commit()

    # The conflict branch keeps the existing primary key.
    created = row.id == new_id
    logger.debug(
        "%s address %s for user %s", "Created" if created else "Updated", row.id, user_id
    )
    return row, created


async def delete_address(db: AsyncSession, user_id: uuid.UUID, address_id: str) -> None:
    try:
        parsed_id = uuid.UUID(address_id)
    except ValueError:
        raise NotFoundError("Address not found")

    result = await db.execute(select(Address).where(Address.id == parsed_id))
    row = result.scalar_one_or_none()
    if row is None or row.user_id != user_id:
        raise NotFoundError("Address not found")

    await db.delete(row)
    await db.commit()
