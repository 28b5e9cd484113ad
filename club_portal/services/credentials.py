"""Portal credential derivation"""

import re
from typing import NamedTuple, Optional

from club_portal.errors import InvalidInput

PASSWORD_SUFFIX = "123"

_DISALLOWED = re.compile(r"[^a-z0-9]")


class Credentials(NamedTuple):
    username: str
    password: str


def derive_username(display_name: str) -> str:
    """'Ada Lovelace' -> 'ada'"""
    tokens = (display_name or "").split()
    if not tokens:
        raise InvalidInput("A name is required to derive credentials")

    username = _DISALLOWED.sub("", tokens[0].lower())
    if not username:
        raise InvalidInput(f"Cannot derive a username from {display_name!r}")
    return username


def derive_credentials(
    display_name: str,
    username: Optional[str] = None,
    password: Optional[str] = None
) -> Credentials:
    """Fill in whichever of username/password is missing from the display name.

    Deterministic and side-effect free. No uniqueness check is made, so two
    members called "Sam" get the same pair.
    """
    if username and password:
        return Credentials(username, password)

    derived = derive_username(display_name)
    return Credentials(
        username=username or derived,
        password=password or f"{derived}{PASSWORD_SUFFIX}"
    )


def normalize_username(username: str) -> str:
    """Usernames are matched trimmed and case-insensitively"""
    return username.strip().lower()
