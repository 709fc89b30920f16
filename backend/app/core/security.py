"""
JWT verification for identifying the current user.

Tokens are issued by the authentication service; this backend only needs to
verify them and read the ``user_id`` claim.
"""
from typing import Optional
from jose import JWTError, jwt
from app.core.config import settings


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        return None
