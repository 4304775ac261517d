"""Credential storage and bearer token issuance for users and administrators."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from voice_capture.core.config import settings
from voice_capture.core.errors import Conflict, Forbidden, NotFound, Unauthenticated
from voice_capture.core.logger import get_logger
from voice_capture.core.security import (
    ADMIN_KIND,
    USER_KIND,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from voice_capture.db.models import AdminUser, UserProfile, utcnow
from voice_capture.schemas.auth import Principal

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
PROFILE_FIELDS = ("full_name", "phone", "state", "mother_tongue")


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _user_token(user: UserProfile) -> str:
    return create_access_token(
        user.id, USER_KIND, settings.USER_TOKEN_EXPIRE_HOURS, email=user.email
    )


def register(
    db: Session, email: str, password: str, **profile
) -> tuple[UserProfile, str]:
    """Create a user and sign a token for it.

    Args:
        db (Session): The database session.
        email (str): Login email, unique across users.
        password (str): Plain password, stored only as a salted hash.
        **profile: Optional profile fields (full_name, phone, state, mother_tongue).
    Returns:
        tuple[UserProfile, str]: The new user and its token.
    """
    email = _normalize_email(email)
    if db.query(UserProfile.id).filter(UserProfile.email == email).first():
        raise Conflict("User already exists")

    user = UserProfile(
        email=email,
        password_hash=hash_password(password),
        **{k: v for k, v in profile.items() if k in PROFILE_FIELDS},
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent signup with the same email
        db.rollback()
        raise Conflict("User already exists")
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user, _user_token(user)


def authenticate(db: Session, email: str, password: str) -> tuple[UserProfile, str]:
    user = (
        db.query(UserProfile)
        .filter(UserProfile.email == _normalize_email(email))
        .first()
    )
    if user is None or not verify_password(user.password_hash, password):
        logger.warning("Rejected sign-in attempt")
        raise Unauthenticated(INVALID_CREDENTIALS)
    return user, _user_token(user)


def authenticate_admin(
    db: Session, username: str, password: str
) -> tuple[AdminUser, str]:
    admin = db.query(AdminUser).filter(AdminUser.username == username).first()
    if admin is None or not verify_password(admin.password_hash, password):
        logger.warning("Rejected admin sign-in attempt")
        raise Unauthenticated(INVALID_CREDENTIALS)
    token = create_access_token(
        admin.id, ADMIN_KIND, settings.ADMIN_TOKEN_EXPIRE_HOURS, username=admin.username
    )
    return admin, token


def provision_admin(db: Session, username: str, password: str) -> AdminUser:
    """Create an administrator, or reset the password of an existing one."""
    admin = db.query(AdminUser).filter(AdminUser.username == username).first()
    if admin is None:
        admin = AdminUser(username=username, password_hash=hash_password(password))
        db.add(admin)
        logger.info(f"Created admin {username}")
    else:
        admin.password_hash = hash_password(password)
        logger.info(f"Reset password of admin {username}")
    db.commit()
    db.refresh(admin)
    return admin


def verify(token: str | None, require_admin: bool = False) -> Principal:
    """Decode a bearer token into the principal it was issued for.

    Expiry is enforced only by the signature check; there is no revocation.
    """
    if not token:
        raise Unauthenticated()
    payload = decode_token(token)
    kind = payload.get("kind")
    if kind not in (USER_KIND, ADMIN_KIND) or "sub" not in payload:
        raise Forbidden("Invalid token")
    if require_admin and not payload.get("is_admin"):
        raise Forbidden("Admin access required")
    return Principal(
        id=payload["sub"],
        kind=kind,
        email=payload.get("email"),
        username=payload.get("username"),
    )


def get_profile(db: Session, user_id: str) -> UserProfile:
    user = db.get(UserProfile, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def update_profile(db: Session, user_id: str, **fields) -> UserProfile:
    user = get_profile(db, user_id)
    for key, value in fields.items():
        if key in PROFILE_FIELDS:
            setattr(user, key, value)
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    return user
