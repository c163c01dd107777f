"""
Todo API - Session Tokens

Issuing and verifying the signed bearer tokens handed out at login.

Claims:
    - ``id``       -- the user's id.
    - ``username`` -- carried so the client can display it without a lookup.
    - ``iat``      -- issued-at timestamp (UTC).
    - ``exp``      -- expiration timestamp (UTC); the token is rejected after it.

Tokens are stateless: a token is valid when its signature checks out and
``exp`` has not passed. Nothing is stored server-side.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from todo_api.auth.models import Identity
from todo_api.config import settings
from todo_api.errors import Forbidden

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("id", "username", "exp")


def create_access_token(
    identity: Identity,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed access token for the given identity."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    if now is None:
        now = datetime.now(timezone.utc)

    to_encode = {
        "id": identity.id,
        "username": identity.username,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_access_token(token: str) -> Identity:
    """
    Decode and validate a token.

    Returns the identity it carries, or raises Forbidden when the signature
    is wrong, the token is malformed or expired, or a claim is missing.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError as e:
        logger.debug("Rejected token: %s", e)
        raise Forbidden()

    if any(payload.get(claim) in (None, "") for claim in REQUIRED_CLAIMS):
        logger.debug("Rejected token with missing claims")
        raise Forbidden()

    return Identity(id=str(payload["id"]), username=str(payload["username"]))
