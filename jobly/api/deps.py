"""Request-scoped dependencies: auth claims and repositories."""

from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storage.repositories import CompanyRepository, JobRepository

from ..auth import decode_token, ensure_admin
from ..database import get_database

bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[Dict[str, Any]]:
    """Claims of the bearer token, or None when no token was sent."""
    if credentials is None:
        return None
    return decode_token(credentials.credentials)


def require_admin(user: Optional[Dict[str, Any]] = Depends(get_current_user)) -> Dict[str, Any]:
    return ensure_admin(user)


def get_company_repository() -> CompanyRepository:
    return CompanyRepository(get_database())


def get_job_repository() -> JobRepository:
    return JobRepository(get_database())
