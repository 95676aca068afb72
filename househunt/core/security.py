# househunt/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

# --------------------------------------
# Password hashing config
# --------------------------------------
# pbkdf2_sha256: salted, 29000+ rounds, no 72-byte limit,
# and no bcrypt backend version issues. verify() is constant-time.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


# --------------------------------------
# Session tokens
# --------------------------------------

class InvalidToken(Exception):
    """Signature mismatch, malformed token, missing claims or expiry."""


class Claims(BaseModel):
    """
    Point-in-time snapshot of a user, as carried by a session token.

    role/status are NOT refreshed from the store: an owner approved after
    this token was issued still reads as pending here until they log in again.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: int = Field(alias="userId")
    role: str
    status: str
    iat: int
    exp: int

    def as_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_minutes: int = 120):
        if not secret_key:
            raise ValueError("token secret must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires = timedelta(minutes=expires_minutes)

    def issue(self, user: Any, expires_delta: Optional[timedelta] = None) -> str:
        """
        Encode {userId, sub, role, status, iat, exp} for `user`.
        Any object with id/role/status attributes works.
        """
        now = datetime.now(timezone.utc)
        to_encode = {
            "userId": str(user.id),
            "sub": str(user.id),
            "role": user.role,
            "status": user.status,
            "iat": now,
            "exp": now + (expires_delta if expires_delta is not None else self._expires),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Claims:
        """
        Decode and validate a token. Self-contained: never consults the store.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            raise InvalidToken(str(e)) from e

        for claim in ("userId", "role", "status"):
            if payload.get(claim) in (None, ""):
                raise InvalidToken(f"Missing {claim} in token")

        try:
            return Claims.model_validate(payload)
        except PydanticValidationError as e:
            raise InvalidToken("Malformed token claims") from e
