import time
import jwt
import pytest
from unittest.mock import patch
from voice_capture.core.config import settings
from voice_capture.core.errors import Conflict, Forbidden, NotFound, Unauthenticated
from voice_capture.core.security import JWT_ALGORITHM, create_access_token
from voice_capture.db.models import UserProfile
from voice_capture.services import identity


def test_register_hashes_password(test_db):
    user, token = identity.register(test_db, "Asha@X.com", "pw", full_name="Asha Rao")
    assert user.email == "asha@x.com"
    assert user.password_hash != "pw"
    principal = identity.verify(token)
    assert principal.id == user.id
    assert principal.kind == "user"
    assert principal.email == "asha@x.com"


def test_register_duplicate_email(test_db):
    identity.register(test_db, "asha@x.com", "pw")
    with pytest.raises(Conflict):
        identity.register(test_db, "ASHA@x.com", "other")
    assert test_db.query(UserProfile).count() == 1


def test_register_ignores_unknown_profile_fields(test_db):
    user, _ = identity.register(test_db, "a@x.com", "pw", state="KA", is_admin=True)
    assert user.state == "KA"


def test_authenticate_same_error_for_unknown_and_wrong(test_db):
    identity.register(test_db, "asha@x.com", "pw")
    with pytest.raises(Unauthenticated) as wrong_pw:
        identity.authenticate(test_db, "asha@x.com", "nope")
    with pytest.raises(Unauthenticated) as no_user:
        identity.authenticate(test_db, "ghost@x.com", "pw")
    assert wrong_pw.value.message == no_user.value.message


def test_authenticate_success(test_db):
    created, _ = identity.register(test_db, "asha@x.com", "pw")
    user, token = identity.authenticate(test_db, "asha@x.com", "pw")
    assert user.id == created.id
    assert identity.verify(token).id == created.id


def test_admin_token_lifetime_and_flag(test_db):
    identity.provision_admin(test_db, "admin", "admin123")
    admin, token = identity.authenticate_admin(test_db, "admin", "admin123")
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[JWT_ALGORITHM])
    assert payload["is_admin"] is True
    assert payload["exp"] - payload["iat"] == 24 * 3600
    principal = identity.verify(token, require_admin=True)
    assert principal.is_admin
    assert principal.username == "admin"


def test_user_token_lifetime(test_db):
    _, token = identity.register(test_db, "asha@x.com", "pw")
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[JWT_ALGORITHM])
    assert payload["exp"] - payload["iat"] == 7 * 24 * 3600
    assert payload["is_admin"] is False


def test_provision_admin_resets_password(test_db):
    identity.provision_admin(test_db, "admin", "old")
    identity.provision_admin(test_db, "admin", "new")
    with pytest.raises(Unauthenticated):
        identity.authenticate_admin(test_db, "admin", "old")
    admin, _ = identity.authenticate_admin(test_db, "admin", "new")
    assert admin.username == "admin"


def test_verify_missing_token():
    with pytest.raises(Unauthenticated):
        identity.verify(None)
    with pytest.raises(Unauthenticated):
        identity.verify("")


def test_verify_bad_signature():
    token = jwt.encode({"sub": "1", "kind": "user"}, "wrong-secret", algorithm="HS256")
    with pytest.raises(Forbidden):
        identity.verify(token)


def test_verify_expired_token():
    with patch("voice_capture.core.security.time.time", return_value=time.time() - 10 * 3600):
        token = create_access_token("1", "user", expires_hours=1)
    with pytest.raises(Forbidden) as exc:
        identity.verify(token)
    assert exc.value.message == "Token expired"


def test_verify_user_token_not_admin(test_db):
    _, token = identity.register(test_db, "asha@x.com", "pw")
    with pytest.raises(Forbidden):
        identity.verify(token, require_admin=True)


def test_profile_update(test_db):
    user, _ = identity.register(test_db, "asha@x.com", "pw", full_name="Asha")
    updated = identity.update_profile(test_db, user.id, full_name="Asha Rao", mother_tongue="Kannada")
    assert updated.full_name == "Asha Rao"
    assert updated.mother_tongue == "Kannada"
    assert identity.get_profile(test_db, user.id).full_name == "Asha Rao"


def test_profile_missing(test_db):
    with pytest.raises(NotFound):
        identity.get_profile(test_db, "no-such-user")
