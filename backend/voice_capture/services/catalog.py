from typing import List
from sqlalchemy import delete as sql_delete, exists
from sqlalchemy.orm import Session
from voice_capture.core.errors import BadRequest, NotFound
from voice_capture.core.logger import get_logger
from voice_capture.db.models import Recording, Sentence

logger = get_logger(__name__)

DELETED = "deleted"
DEACTIVATED = "deactivated"


def list_active(db: Session) -> List[Sentence]:
    """Active sentences in the order they were created."""
    return (
        db.query(Sentence)
        .filter(Sentence.is_active.is_(True))
        .order_by(Sentence.id.asc())
        .all()
    )


def list_all(db: Session) -> List[Sentence]:
    return db.query(Sentence).order_by(Sentence.id.desc()).all()


def get(db: Session, sentence_id: int) -> Sentence:
    sentence = db.get(Sentence, sentence_id)
    if sentence is None:
        raise NotFound("Sentence not found")
    return sentence


def create(db: Session, text: str) -> Sentence:
    if not text or not text.strip():
        raise BadRequest("Sentence text is required")
    sentence = Sentence(text=text.strip(), is_active=True)
    db.add(sentence)
    db.commit()
    db.refresh(sentence)
    logger.info(f"Created sentence {sentence.id}")
    return sentence


def update(
    db: Session, sentence_id: int, text: str | None = None, active: bool | None = None
) -> Sentence:
    sentence = get(db, sentence_id)
    if text is not None:
        if not text.strip():
            raise BadRequest("Sentence text is required")
        sentence.text = text.strip()
    if active is not None:
        sentence.is_active = active
    db.commit()
    db.refresh(sentence)
    return sentence


def delete(db: Session, sentence_id: int) -> str:
    """Delete a sentence, or deactivate it when submissions reference it.

    The reference check and the delete are a single statement.

    Args:
        db (Session): The database session.
        sentence_id (int): The sentence to remove.
    Returns:
        str: ``deleted`` when the row was removed, ``deactivated`` when it was
        kept with ``is_active=False`` instead.
    """
    sentence = get(db, sentence_id)
    stmt = (
        sql_delete(Sentence)
        .where(
            Sentence.id == sentence_id,
            ~exists().where(Recording.sentence_id == Sentence.id),
        )
        .execution_options(synchronize_session="fetch")
    )
    result = db.execute(stmt)
    if result.rowcount:
        db.commit()
        logger.info(f"Deleted sentence {sentence_id}")
        return DELETED

    sentence.is_active = False
    db.commit()
    logger.info(f"Sentence {sentence_id} has recordings, marked inactive")
    return DEACTIVATED
