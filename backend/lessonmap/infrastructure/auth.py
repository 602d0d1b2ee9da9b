"""Bearer Token Verification — turns an Authorization header into a requester id.

Invariants:
    - Only verification happens here; tokens are issued by the users service
    - Any missing, malformed, expired or badly signed token → AuthenticationError (403)
    - The returned UserId comes from the "userId" claim and is trusted downstream as-is

Design Decisions:
    - HTTPBearer(auto_error=False): the missing-header case goes through the same
      AuthenticationError envelope as a bad token instead of FastAPI's default 403 body
    - PyJWT over hand-rolled HMAC checks: signature, expiry and algorithm pinning in one call
"""

import logging
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lessonmap.config import get_settings
from lessonmap.core.domain_types import UserId
from lessonmap.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def verify_token(token: str, key: str, algorithm: str = "HS256") -> UserId:
    """Decode a signed token and return the requester id it carries."""
    try:
        payload = jwt.decode(token, key, algorithms=[algorithm])
        return UserId(UUID(str(payload["userId"])))
    except (jwt.PyJWTError, KeyError, ValueError) as e:
        logger.warning(f"Token verification failed: {e}")
        raise AuthenticationError()


def get_requester_id(
    creds: HTTPAuthorizationCredentials | None = Depends(security),
) -> UserId:
    """FastAPI dependency: requester id from the Authorization header."""
    if creds is None or not creds.credentials:
        raise AuthenticationError()
    settings = get_settings()
    return verify_token(creds.credentials, settings.jwt_key, settings.jwt_algorithm)
