import os
import logging
from typing import Dict, NamedTuple, Optional

from auth.token import decode_token
from services.errors import InvalidCredential, Unauthenticated

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "token")


class Identity(NamedTuple):
    id: int
    role: Optional[int]


def parse_cookie_header(raw: str) -> Dict[str, str]:
    """
    Split a Cookie header into name/value pairs.

    Pairs are parsed one at a time, so a malformed cookie set by some other
    site script does not hide the ones after it. The first occurrence of a
    name wins.
    """
    cookies: Dict[str, str] = {}
    for chunk in raw.split(";"):
        if "=" in chunk:
            name, value = chunk.split("=", 1)
        else:
            name, value = "", chunk
        name, value = name.strip(), value.strip()
        if not name or name in cookies:
            continue
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies[name] = value
    return cookies


def _cookie_token(req) -> Optional[str]:
    raw = req.headers.get("Cookie", "")
    if not raw:
        return None
    return parse_cookie_header(raw).get(AUTH_COOKIE_NAME) or None


def token_from_request(req) -> Optional[str]:
    """Cookie first, then the Authorization header."""
    token = _cookie_token(req)
    if token:
        return token
    auth = req.headers.get("Authorization", "")
    if auth.startswith("Bearer ") and auth[7:].strip():
        return auth[7:].strip()
    return None


def _as_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def identity_from_claims(claims: dict) -> Identity:
    # Older tokens carry `user_id`, newer ones `id`
    raw_id = claims.get("id")
    if raw_id is None:
        raw_id = claims.get("user_id")
    user_id = _as_int(raw_id)
    if user_id is None:
        logger.warning(f"No usable user id in token claims: {sorted(claims)}")
        raise InvalidCredential("Invalid token format")
    return Identity(id=user_id, role=_as_int(claims.get("role")))


def resolve_identity(req) -> Identity:
    token = token_from_request(req)
    if not token:
        raise Unauthenticated()
    claims = decode_token(token)
    if claims is None:
        raise InvalidCredential()
    return identity_from_claims(claims)
