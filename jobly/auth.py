"""
Bearer-token helpers.

Tokens are HS256 JWTs carrying ``username`` and ``isAdmin``.
"""

from typing import Any, Dict, Optional

import jwt

from .config import get_settings
from .errors import UnauthorizedError

ALGORITHM = "HS256"


def create_token(username: str, is_admin: bool = False, secret_key: Optional[str] = None) -> str:
    payload = {"username": username, "isAdmin": bool(is_admin)}
    return jwt.encode(payload, secret_key or get_settings().secret_key, algorithm=ALGORITHM)


def decode_token(token: str, secret_key: Optional[str] = None) -> Dict[str, Any]:
    """
    Verify a token and return its claims.

    Raises:
        UnauthorizedError: if the signature or format is invalid
    """
    try:
        return jwt.decode(token, secret_key or get_settings().secret_key, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        raise UnauthorizedError("Invalid token") from e


def ensure_admin(claims: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not claims or not claims.get("isAdmin"):
        raise UnauthorizedError("Admin required")
    return claims
