from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from voice_capture.api.deps import require_user
from voice_capture.db.base import get_db
from voice_capture.db.models import RecordingSession as SessionModel
from voice_capture.schemas.auth import Principal
from voice_capture.schemas.session import RecordingSession, SessionCreate, SessionUpdate
from voice_capture.services import sessions

router = APIRouter(prefix="/recording-sessions", tags=["recording-sessions"])


@router.post("", response_model=RecordingSession)
def open_session(
    body: SessionCreate,
    principal: Principal = Depends(require_user),
    db: Session = Depends(get_db),
) -> SessionModel:
    """Open a recording session for the caller.

    Args:
        body (SessionCreate): Number of sentences in the run.
        principal (Principal, optional): The caller. Defaults to Depends(require_user).
        db (Session, optional): The database session. Defaults to Depends(get_db).
    Returns:
        RecordingSession: The new session, or the caller's open one for the same run.
    """
    return sessions.open_session(db, principal.id, body.total_sentences)


@router.get("/current", response_model=RecordingSession)
def current_session(
    principal: Principal = Depends(require_user), db: Session = Depends(get_db)
) -> SessionModel:
    return sessions.current(db, principal.id)


@router.put("/{session_id}", response_model=RecordingSession)
def update_session(
    session_id: str,
    body: SessionUpdate,
    principal: Principal = Depends(require_user),
    db: Session = Depends(get_db),
) -> SessionModel:
    return sessions.update(db, session_id, principal.id, body.completed_sentences)


@router.post("/{session_id}/advance", response_model=RecordingSession)
def advance_session(
    session_id: str,
    principal: Principal = Depends(require_user),
    db: Session = Depends(get_db),
) -> SessionModel:
    return sessions.advance(db, session_id, principal.id)
