from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from lexdesk.core.access import ClientIdentity, Identity, LawyerIdentity, identity_from_claims
from lexdesk.core.errors import Unauthorized
from lexdesk.core.security import decode_token
from lexdesk.db.base import utcnow
from lexdesk.db.session import get_db
from lexdesk.models.client import Client
from lexdesk.models.user import User
from lexdesk.services.invoice_store import InvoiceStore

bearer_scheme = HTTPBearer(auto_error=False)
logger = logging.getLogger("security")


def _log_auth_event(event: str, *, request: Request, extra: Optional[dict] = None) -> None:
    payload = {
        "event": event,
        "request_id": request.headers.get("x-request-id"),
        "path": request.url.path,
        "method": request.method,
        "client": request.client.host if request.client else None,
    }
    if extra:
        payload.update(extra)
    logger.info(json.dumps(payload, default=str))


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: Session = Depends(get_db),
) -> Identity:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or not credentials.credentials:
        _log_auth_event("token_missing", request=request)
        raise credentials_exception

    try:
        payload = decode_token(credentials.credentials)
        raw_subject: Optional[int | str] = payload.get("sub")
        if raw_subject is None:
            _log_auth_event("token_missing_sub", request=request)
            raise credentials_exception
        identity = identity_from_claims(payload.get("role"), int(raw_subject))
    except (JWTError, ValueError, TypeError):
        _log_auth_event("token_invalid", request=request)
        raise credentials_exception
    except Unauthorized:
        _log_auth_event("role_unrecognised", request=request, extra={"role": payload.get("role")})
        raise credentials_exception

    if isinstance(identity, LawyerIdentity):
        account = db.get(User, identity.id)
    elif isinstance(identity, ClientIdentity):
        account = db.get(Client, identity.id)
    else:
        raise credentials_exception

    if account is None or not account.is_active:
        _log_auth_event(
            "account_inactive_or_missing",
            request=request,
            extra={"user_id": identity.id, "role": identity.role.value},
        )
        raise credentials_exception

    request.state.identity = identity
    return identity


def get_clock() -> Callable[[], datetime]:
    return utcnow


def get_invoice_store(db: Session = Depends(get_db)) -> InvoiceStore:
    return InvoiceStore(db)
