import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import PyJWTError as JWTError
import logging

SECRET_KEY = os.getenv("JWT_SECRET_KEY", "fallback-secret-key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRY_MINUTES", "60"))

logger = logging.getLogger(__name__)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    token = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    logger.debug(f"Access token created for {data.get('id', data.get('user_id', '[no id]'))} expiring at {expire}")
    return token

def create_user_token(user, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a token in the claim shape the marketplace login flow uses."""
    return create_access_token(
        {"id": user.user_id, "email": user.email, "role": user.role, "name": user.name},
        expires_delta,
    )

def decode_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        logger.debug(f"Token successfully decoded: {payload}")
        return payload
    except JWTError as e:
        logger.warning(f"Failed to decode JWT: {e}")
        return None
