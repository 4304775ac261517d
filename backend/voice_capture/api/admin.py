from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from voice_capture.api.deps import require_admin
from voice_capture.db.base import get_db
from voice_capture.db.models import Sentence as SentenceModel
from voice_capture.db.models import UserProfile
from voice_capture.schemas.admin import AdminRecordingRow, AdminUser
from voice_capture.schemas.auth import AdminAuthRequest, AdminAuthResponse
from voice_capture.schemas.sentence import (
    Sentence,
    SentenceCreate,
    SentenceDeleteResult,
    SentenceUpdate,
)
from voice_capture.services import admin_view, catalog, identity

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/auth", response_model=AdminAuthResponse)
def admin_auth(body: AdminAuthRequest, db: Session = Depends(get_db)) -> dict:
    admin, token = identity.authenticate_admin(db, body.username, body.password)
    return {"admin": admin, "token": token}


@router.get("/sentences", response_model=List[Sentence], dependencies=[Depends(require_admin)])
def admin_sentences(db: Session = Depends(get_db)) -> List[SentenceModel]:
    return admin_view.list_sentences(db)


@router.post("/sentences", response_model=Sentence, dependencies=[Depends(require_admin)])
def create_sentence(body: SentenceCreate, db: Session = Depends(get_db)) -> SentenceModel:
    return catalog.create(db, body.text)


@router.put(
    "/sentences/{sentence_id}", response_model=Sentence, dependencies=[Depends(require_admin)]
)
def update_sentence(
    sentence_id: int, body: SentenceUpdate, db: Session = Depends(get_db)
) -> SentenceModel:
    return catalog.update(db, sentence_id, text=body.text, active=body.is_active)


@router.delete(
    "/sentences/{sentence_id}",
    response_model=SentenceDeleteResult,
    dependencies=[Depends(require_admin)],
)
def delete_sentence(sentence_id: int, db: Session = Depends(get_db)) -> dict:
    """Delete a sentence, or mark it inactive when recordings reference it.

    Args:
        sentence_id (int): The sentence to delete.
        db (Session, optional): The database session. Defaults to Depends(get_db).
    Returns:
        dict: The sentence id and whether it was ``deleted`` or ``deactivated``.
    """
    outcome = catalog.delete(db, sentence_id)
    if outcome == catalog.DEACTIVATED:
        message = "Sentence has recordings and was marked inactive"
    else:
        message = "Sentence deleted successfully"
    return {"id": sentence_id, "outcome": outcome, "message": message}


@router.get("/users", response_model=List[AdminUser], dependencies=[Depends(require_admin)])
def admin_users(db: Session = Depends(get_db)) -> List[UserProfile]:
    return admin_view.list_users(db)


@router.get(
    "/recordings", response_model=List[AdminRecordingRow], dependencies=[Depends(require_admin)]
)
def admin_recordings(db: Session = Depends(get_db)) -> List[AdminRecordingRow]:
    return admin_view.list_submissions(db)
