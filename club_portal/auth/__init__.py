"""Authentication module"""

from club_portal.auth.jwt import create_access_token, get_current_member, verify_token

__all__ = [
    "create_access_token",
    "verify_token",
    "get_current_member",
]
