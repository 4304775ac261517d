from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from voice_capture.api.deps import require_user
from voice_capture.db.base import get_db
from voice_capture.db.models import UserProfile
from voice_capture.schemas.auth import Principal
from voice_capture.schemas.profile import ProfileOut, ProfileUpdate
from voice_capture.services import identity

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileOut)
def get_profile(
    principal: Principal = Depends(require_user), db: Session = Depends(get_db)
) -> UserProfile:
    return identity.get_profile(db, principal.id)


@router.put("", response_model=ProfileOut)
def update_profile(
    body: ProfileUpdate,
    principal: Principal = Depends(require_user),
    db: Session = Depends(get_db),
) -> UserProfile:
    return identity.update_profile(db, principal.id, **body.model_dump(exclude_unset=True))
