"""
Access token issuance and verification.

Tokens are HS256 JWTs signed with JWT_SECRET. The login core never looks
inside them; only this module does.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from login_api.core.config import settings

logger = logging.getLogger(__name__)


def issue_access_token(subject: str, *, email: Optional[str] = None, now: Optional[datetime] = None, settings_obj=None) -> str:
    cfg = settings_obj or settings
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=cfg.ACCESS_TOKEN_TTL_SECONDS),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, cfg.JWT_SECRET, algorithm=cfg.JWT_ALGORITHM)


def decode_access_token(token: str, settings_obj=None) -> Optional[str]:
    """
    Verify an access token and return its subject.

    Returns None for expired, tampered or otherwise invalid tokens.
    """
    cfg = settings_obj or settings
    try:
        payload = jwt.decode(
            token,
            cfg.JWT_SECRET,
            algorithms=[cfg.JWT_ALGORITHM],
            options={"verify_signature": True, "verify_exp": True},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Access token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.debug(f"Invalid access token: {e}")
        return None
    return payload.get("sub")
