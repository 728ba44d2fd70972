from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from lexdesk.core.settings import settings
from lexdesk.models.enums import IdentityRole


def _expiry_delta(expires_delta: Optional[timedelta]) -> timedelta:
    if expires_delta is not None:
        return expires_delta
    minutes = settings.access_token_expire_minutes
    if minutes <= 0:
        minutes = 60
    return timedelta(minutes=minutes)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + _expiry_delta(expires_delta)
    to_encode.setdefault("iat", now)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.algorithm)


def create_identity_token(subject_id: int, role: IdentityRole, expires_delta: Optional[timedelta] = None) -> str:
    """Mint a bearer token for a lawyer or client account."""
    return create_access_token({"sub": str(subject_id), "role": role.value}, expires_delta=expires_delta)


def decode_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.algorithm])
