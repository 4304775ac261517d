"""Recording submission pipeline.

A submission id names the take after its speaker and sentence:

* accepted take: ``<name>_<sentence_id>``, at most one per user and sentence
* rejected take: ``<name>_rejected_<sentence_id>`` for the first one, then
  ``<name>_rejected_<sentence_id>-<n>`` where ``n`` is the 1-based ordinal of
  the rejection for that user and sentence

The rejection ordinal comes from counting existing rejected rows, so two
concurrent rejections can compute the same ordinal. The primary key and the
``(user_id, sentence_id, rejection_ordinal)`` constraint turn that into an
IntegrityError; the loser recounts and retries a bounded number of times and
then gives up with ``Conflict``.
"""

import re
from typing import List
from sqlalchemy import func, insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from voice_capture.core.config import settings
from voice_capture.core.errors import BadRequest, Conflict, Internal, NotFound
from voice_capture.core.logger import get_logger
from voice_capture.db.models import (
    Recording,
    Sentence,
    SubmissionStatus,
    UserProfile,
)
from voice_capture.services import storage

logger = get_logger(__name__)

ACCEPTED = SubmissionStatus.ACCEPTED.value
REJECTED = SubmissionStatus.REJECTED.value


def user_local_name(user: UserProfile) -> str:
    """Display name with whitespace runs as underscores, else email local part, else id."""
    if user.full_name and user.full_name.strip():
        return re.sub(r"\s+", "_", user.full_name.strip())
    if user.email and user.email.split("@")[0]:
        return user.email.split("@")[0]
    return str(user.id)


def accepted_submission_id(name: str, sentence_id: int) -> str:
    return f"{name}_{sentence_id}"


def rejected_submission_id(name: str, sentence_id: int, ordinal: int) -> str:
    if ordinal == 1:
        return f"{name}_rejected_{sentence_id}"
    return f"{name}_rejected_{sentence_id}-{ordinal}"


def count_rejections(db: Session, user_id: str, sentence_id: int) -> int:
    return (
        db.query(func.count(Recording.id))
        .filter(
            Recording.user_id == user_id,
            Recording.sentence_id == sentence_id,
            Recording.status == REJECTED,
        )
        .scalar()
    )


def owner_of(db: Session, submission_id: str) -> str | None:
    return (
        db.query(Recording.user_id).filter(Recording.id == submission_id).scalar()
    )


def ensure_not_taken(db: Session, submission_id: str, user_id: str):
    """Refuse an id already held by another speaker with the same local name."""
    owner = owner_of(db, submission_id)
    if owner is not None and owner != user_id:
        logger.warning(f"Id {submission_id} is taken by user {owner}")
        raise Conflict(f"Recording id {submission_id} is already used by another speaker")


def has_accepted(db: Session, user_id: str, sentence_id: int, submission_id: str) -> bool:
    if db.get(Recording, submission_id) is not None:
        return True
    return (
        db.query(Recording.id)
        .filter(
            Recording.user_id == user_id,
            Recording.sentence_id == sentence_id,
            Recording.status == ACCEPTED,
        )
        .first()
        is not None
    )


class SubmissionPipeline:
    def __init__(self, retries: int | None = None):
        self.retries = settings.REJECTION_ID_RETRIES if retries is None else retries

    async def submit(
        self,
        db: Session,
        user_id: str,
        sentence_id: int,
        outcome: str,
        audio: bytes | None,
        filename: str | None = None,
        attempt_number: int = 1,
        duration_seconds: float | None = None,
    ) -> Recording:
        """Store one recorded take and insert its submission row.

        Args:
            db (Session): The database session.
            user_id (str): The speaker.
            sentence_id (int): The sentence that was read.
            outcome (str): ``accepted`` or ``rejected``.
            audio (bytes | None): The audio payload.
            filename (str | None, optional): Original file name of the upload.
            attempt_number (int, optional): Client-side attempt counter.
            duration_seconds (float | None, optional): Client-measured
                duration, used when the payload is not a readable WAV.
        Returns:
            Recording: The persisted submission.
        """
        if not audio:
            raise BadRequest("No audio file provided")
        if len(audio) > settings.MAX_UPLOAD_BYTES:
            raise BadRequest("Audio file too large")
        if outcome not in (ACCEPTED, REJECTED):
            raise BadRequest("status must be 'accepted' or 'rejected'")

        sentence = db.get(Sentence, sentence_id)
        if sentence is None:
            raise NotFound("Sentence not found")
        user = db.get(UserProfile, user_id)
        if user is None:
            raise NotFound("User not found")

        name = user_local_name(user)
        ordinal = None
        if outcome == ACCEPTED:
            submission_id = accepted_submission_id(name, sentence_id)
            ensure_not_taken(db, submission_id, user_id)
            if has_accepted(db, user_id, sentence_id, submission_id):
                raise Conflict(f"Sentence {sentence_id} already has an accepted recording")
        else:
            ordinal = count_rejections(db, user_id, sentence_id) + 1
            submission_id = rejected_submission_id(name, sentence_id, ordinal)
            ensure_not_taken(db, submission_id, user_id)

        try:
            audio_url = await storage.save_audio(audio, filename)
        except OSError as e:
            logger.error(f"Failed to store audio for {submission_id}: {e}")
            raise Internal("Failed to store audio")

        duration = storage.wav_duration(audio)
        if duration is None:
            duration = duration_seconds

        attempts = 0
        while True:
            # Core insert, so a colliding id always reaches the database constraints
            stmt = insert(Recording).values(
                id=submission_id,
                user_id=user_id,
                sentence_id=sentence_id,
                audio_url=audio_url,
                status=outcome,
                attempt_number=attempt_number,
                rejection_ordinal=ordinal,
                duration_seconds=duration,
            )
            try:
                db.execute(stmt)
                db.commit()
                break
            except IntegrityError:
                db.rollback()
                # recounting our own rejections cannot move past another speaker's id
                ensure_not_taken(db, submission_id, user_id)
                if outcome == ACCEPTED:
                    raise Conflict(f"Sentence {sentence_id} already has an accepted recording")
                attempts += 1
                if attempts > self.retries:
                    logger.warning(f"Giving up on colliding rejected id {submission_id}")
                    raise Conflict("Concurrent rejected recording, please retry")
                logger.warning(f"Rejected id {submission_id} collided, recounting")
                ordinal = count_rejections(db, user_id, sentence_id) + 1
                submission_id = rejected_submission_id(name, sentence_id, ordinal)
            except SQLAlchemyError as e:
                db.rollback()
                # the stored blob is left in place
                logger.error(f"Failed to save recording {submission_id}: {e}")
                raise Internal("Failed to save recording")

        row = db.get(Recording, submission_id)
        logger.info(f"Saved {outcome} recording {row.id} ({audio_url})")
        return row


def list_for_user(db: Session, user_id: str) -> List[dict]:
    """The user's submissions, newest first, with the sentence text."""
    rows = (
        db.query(Recording, Sentence.text)
        .outerjoin(Sentence, Recording.sentence_id == Sentence.id)
        .filter(Recording.user_id == user_id)
        .order_by(Recording.recorded_at.desc())
        .all()
    )
    return [
        {
            "id": rec.id,
            "user_id": rec.user_id,
            "sentence_id": rec.sentence_id,
            "audio_url": rec.audio_url,
            "status": rec.status,
            "attempt_number": rec.attempt_number,
            "recorded_at": rec.recorded_at,
            "duration_seconds": rec.duration_seconds,
            "sentence_text": text,
        }
        for rec, text in rows
    ]
