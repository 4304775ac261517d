from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from voice_capture.core.errors import Forbidden
from voice_capture.schemas.auth import Principal
from voice_capture.services import identity

_bearer_scheme = HTTPBearer(auto_error=False)


def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> str | None:
    if not credentials or not credentials.credentials:
        return None
    return credentials.credentials


def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Principal:
    principal = identity.verify(_token(credentials))
    if principal.kind != "user":
        raise Forbidden("User token required")
    return principal


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Principal:
    return identity.verify(_token(credentials), require_admin=True)
