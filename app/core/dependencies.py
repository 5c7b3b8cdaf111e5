from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.auth.service import get_user
from app.core.exceptions import UnauthorizedError
from app.core.security import TokenIssuer, token_issuer
from app.db.session import async_session_factory
from app.maps.client import MapboxClient, get_mapbox_client

# auto_error=False so a missing header surfaces as our 401, not FastAPI's 403.
security_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncSession:  # type: ignore[misc]
    async with async_session_factory() as session:
        yield session


def get_token_issuer() -> TokenIssuer:
    return token_issuer


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> User:
    claims = issuer.verify(credentials.credentials if credentials else None)
    user = await get_user(db, claims.user_id)
    if user is None:
        raise UnauthorizedError()
    return user


DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
Issuer = Annotated[TokenIssuer, Depends(get_token_issuer)]
Mapbox = Annotated[MapboxClient, Depends(get_mapbox_client)]
