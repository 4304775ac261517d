from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from .recording import Recording

DELETED_SENTENCE = "Deleted sentence"
UNKNOWN_USER = "Unknown"


class AdminUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    state: Optional[str] = None
    mother_tongue: Optional[str] = None
    created_at: Optional[datetime] = None


class AdminRecordingRow(Recording):
    """A submission left-joined with its owner and its sentence.

    The ``user_*`` and ``sentence_text`` fields are ``None`` when the joined
    row is gone; ``user_display`` and ``sentence_display`` carry the fallback
    labels shown on the review screen.
    """

    user_full_name: Optional[str] = None
    user_email: Optional[str] = None
    sentence_text: Optional[str] = None
    user_display: str = UNKNOWN_USER
    sentence_display: str = DELETED_SENTENCE
