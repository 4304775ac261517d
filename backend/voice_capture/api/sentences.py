from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from voice_capture.db.base import get_db
from voice_capture.db.models import Sentence as SentenceModel
from voice_capture.schemas.sentence import Sentence
from voice_capture.services import catalog

router = APIRouter(prefix="/sentences", tags=["sentences"])


@router.get("", response_model=List[Sentence])
def list_sentences(db: Session = Depends(get_db)) -> List[SentenceModel]:
    """Get the active sentences in creation order."""
    return catalog.list_active(db)
