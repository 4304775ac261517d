from typing import List
from sqlalchemy.orm import Session
from voice_capture.db.models import Recording, Sentence, UserProfile
from voice_capture.schemas.admin import (
    DELETED_SENTENCE,
    UNKNOWN_USER,
    AdminRecordingRow,
)
from voice_capture.services import catalog


def list_submissions(db: Session) -> List[AdminRecordingRow]:
    """Every submission, newest first, joined with its speaker and sentence."""
    rows = (
        db.query(Recording, UserProfile.full_name, UserProfile.email, Sentence.text)
        .outerjoin(UserProfile, Recording.user_id == UserProfile.id)
        .outerjoin(Sentence, Recording.sentence_id == Sentence.id)
        .order_by(Recording.recorded_at.desc())
        .all()
    )
    result = []
    for rec, full_name, email, sentence_text in rows:
        result.append(
            AdminRecordingRow(
                id=rec.id,
                user_id=rec.user_id,
                sentence_id=rec.sentence_id,
                audio_url=rec.audio_url,
                status=rec.status,
                attempt_number=rec.attempt_number,
                recorded_at=rec.recorded_at,
                duration_seconds=rec.duration_seconds,
                user_full_name=full_name,
                user_email=email,
                sentence_text=sentence_text,
                user_display=full_name or email or UNKNOWN_USER,
                sentence_display=DELETED_SENTENCE if sentence_text is None else sentence_text,
            )
        )
    return result


def list_users(db: Session) -> List[UserProfile]:
    return db.query(UserProfile).order_by(UserProfile.created_at.desc()).all()


def list_sentences(db: Session) -> List[Sentence]:
    return catalog.list_all(db)
