"""JWT token handling"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from club_portal.config import Settings
from club_portal.dependencies import get_app_settings, get_membership_service
from club_portal.errors import NotFound, Unauthorized
from club_portal.services.membership_service import MembershipService

logger = logging.getLogger(__name__)

# Security scheme (missing header handled in get_current_member)
security = HTTPBearer(auto_error=False)

# JWT Configuration
ALGORITHM = "HS256"


def create_access_token(
    data: dict,
    settings: Settings,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.portal_secret_key,
        algorithm=ALGORITHM
    )


def verify_token(token: str, settings: Settings) -> Optional[dict]:
    """Verify and decode JWT token"""
    try:
        return jwt.decode(
            token,
            settings.portal_secret_key,
            algorithms=[ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


async def get_current_member(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
    members: MembershipService = Depends(get_membership_service)
) -> dict:
    """Get current member from JWT token"""
    if credentials is None:
        raise Unauthorized("Not authenticated")

    payload = verify_token(credentials.credentials, settings)
    if payload is None:
        raise Unauthorized("Could not validate credentials")

    member_id: Optional[str] = payload.get("sub")
    if member_id is None:
        raise Unauthorized("Could not validate credentials")

    try:
        return members.get_member(member_id)
    except NotFound:
        raise Unauthorized("Could not validate credentials") from None
