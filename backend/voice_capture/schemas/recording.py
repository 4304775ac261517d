from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class Recording(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: Optional[str] = None
    sentence_id: Optional[int] = None
    audio_url: str
    status: str
    attempt_number: Optional[int] = None
    recorded_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None


class UserRecording(Recording):
    sentence_text: Optional[str] = None
