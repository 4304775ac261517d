"""Recording session tracker.

A session counts the accepted takes of one run through the sentence list.
It moves from ``in_progress`` to ``completed`` exactly when the counter
reaches the total and never leaves ``completed``.
"""

from sqlalchemy import case, literal, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from voice_capture.core.errors import BadRequest, Conflict, Forbidden, NotFound
from voice_capture.core.logger import get_logger
from voice_capture.db.models import RecordingSession, SessionStatus, utcnow

logger = get_logger(__name__)

IN_PROGRESS = SessionStatus.IN_PROGRESS.value
COMPLETED = SessionStatus.COMPLETED.value


def _find_open(db: Session, user_id: str) -> RecordingSession | None:
    return (
        db.query(RecordingSession)
        .filter(
            RecordingSession.user_id == user_id,
            RecordingSession.status == IN_PROGRESS,
        )
        .first()
    )


def _reuse(existing: RecordingSession, total_sentences: int) -> RecordingSession:
    if existing.total_sentences != total_sentences:
        raise Conflict(
            f"Session {existing.id} is still open for {existing.total_sentences} sentences"
        )
    return existing


def open_session(db: Session, user_id: str, total_sentences: int) -> RecordingSession:
    """Open a session, or return the caller's open session for the same list.

    Args:
        db (Session): The database session.
        user_id (str): The owner.
        total_sentences (int): Size of the sentence list being recorded.
    Returns:
        RecordingSession: The open session.
    """
    if total_sentences < 1:
        raise BadRequest("total_sentences must be at least 1")

    existing = _find_open(db, user_id)
    if existing is not None:
        return _reuse(existing, total_sentences)

    session = RecordingSession(
        user_id=user_id,
        total_sentences=total_sentences,
        completed_sentences=0,
        status=IN_PROGRESS,
    )
    db.add(session)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent open won the partial unique index
        db.rollback()
        existing = _find_open(db, user_id)
        if existing is None:
            raise
        return _reuse(existing, total_sentences)
    db.refresh(session)
    logger.info(f"Opened session {session.id} for user {user_id} ({total_sentences})")
    return session


def current(db: Session, user_id: str) -> RecordingSession:
    session = _find_open(db, user_id)
    if session is None:
        raise NotFound("No open session")
    return session


def _owned(db: Session, session_id: str, user_id: str) -> RecordingSession:
    session = db.get(RecordingSession, session_id)
    if session is None:
        raise NotFound("Session not found")
    if session.user_id != user_id:
        raise Forbidden("Session belongs to another user")
    return session


def advance(db: Session, session_id: str, user_id: str) -> RecordingSession:
    """Count one more accepted take against the session.

    The increment and the completion are a single conditional UPDATE so two
    concurrent calls can never push the counter past the total.
    """
    session = _owned(db, session_id, user_id)
    if session.status == COMPLETED:
        raise Conflict("Session already completed")

    reaches_total = (
        RecordingSession.completed_sentences + 1 >= RecordingSession.total_sentences
    )
    stmt = (
        sql_update(RecordingSession)
        .where(
            RecordingSession.id == session_id,
            RecordingSession.user_id == user_id,
            RecordingSession.status == IN_PROGRESS,
            RecordingSession.completed_sentences < RecordingSession.total_sentences,
        )
        .values(
            completed_sentences=RecordingSession.completed_sentences + 1,
            status=case((reaches_total, COMPLETED), else_=IN_PROGRESS),
            completed_at=case(
                (reaches_total, literal(utcnow(), RecordingSession.completed_at.type)),
                else_=RecordingSession.completed_at,
            ),
        )
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    db.commit()
    if result.rowcount == 0:
        raise Conflict("Session already completed")

    db.refresh(session)
    if session.status == COMPLETED:
        logger.info(f"Session {session_id} completed")
    return session


def update(
    db: Session, session_id: str, user_id: str, completed_sentences: int
) -> RecordingSession:
    """Apply a client-sent counter.

    Only ``current + 1`` (an advance) and ``current`` (a repeated request) are
    accepted; status and completion time are always derived here.
    """
    session = _owned(db, session_id, user_id)
    if completed_sentences == session.completed_sentences:
        return session
    if session.status == COMPLETED:
        raise Conflict("Session already completed")
    if completed_sentences != session.completed_sentences + 1:
        raise BadRequest(
            f"completed_sentences must be {session.completed_sentences + 1}"
        )
    return advance(db, session_id, user_id)
