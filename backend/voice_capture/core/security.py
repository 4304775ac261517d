import time
import jwt
from werkzeug.security import generate_password_hash, check_password_hash
from voice_capture.core.config import settings
from voice_capture.core.errors import Forbidden

JWT_ALGORITHM = "HS256"

USER_KIND = "user"
ADMIN_KIND = "admin"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str | None, password: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def create_access_token(
    subject: str, kind: str, expires_hours: int, **claims
) -> str:
    """Sign a bearer token for a principal.

    Args:
        subject (str): The principal id.
        kind (str): ``user`` or ``admin``.
        expires_hours (int): Lifetime of the token.
        **claims: Extra claims copied into the payload (email, username).
    Returns:
        str: The encoded JWT.
    """
    now = int(time.time())
    payload = {
        "sub": str(subject),
        "kind": kind,
        "is_admin": kind == ADMIN_KIND,
        "iat": now,
        "exp": now + expires_hours * 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Forbidden("Token expired")
    except jwt.InvalidTokenError:
        raise Forbidden("Invalid token")
