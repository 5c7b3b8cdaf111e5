import base64
import hashlib
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.config import settings
from app.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def _prehash(password: str) -> bytes:
    # bcrypt only accepts 72 bytes; a fixed 44-byte digest keeps every byte significant.
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(plain), hashed.encode())
    except ValueError:
        # Stored hash is not a bcrypt hash.
        return False


@dataclass(frozen=True)
class TokenClaims:
    user_id: uuid.UUID
    email: str
    expires_at: datetime


class TokenIssuer:
    """Issues and verifies stateless HS256 session tokens."""

    def __init__(self, secret_key: str, algorithm: str, expires_in: timedelta) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_in = expires_in

    @classmethod
    def from_settings(cls) -> "TokenIssuer":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expires_in=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def issue(self, user_id: uuid.UUID, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims | None:
        """Returns the validated claims, or None for any kind of bad token."""
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.debug("Rejected token: expired")
            return None
        except JWTError as exc:
            logger.debug("Rejected token: %s", exc)
            return None

        try:
            return TokenClaims(
                user_id=uuid.UUID(payload["sub"]),
                email=str(payload["email"]),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            logger.debug("Rejected token: malformed claims")
            return None

    def verify(self, token: str | None) -> TokenClaims:
        claims = self.decode(token) if token else None
        if claims is None:
            raise UnauthorizedError()
        return claims


token_issuer = TokenIssuer.from_settings()
