# safespace/core/security.py
from datetime import timedelta

from jose import JWTError, jwt

from safespace.core.config import settings
from safespace.core.timezone import utc_now

ALGORITHM = settings.JWT_ALG


class InvalidSessionToken(Exception):
    pass


def create_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    """Issue a session token for a user id (what the auth service hands the client)."""
    minutes = settings.JWT_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = utc_now() + timedelta(minutes=minutes)
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the user id carried by a session token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        raise InvalidSessionToken(f"Invalid token: {e}") from e

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidSessionToken("Invalid token: missing subject")
    return user_id
