from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class SessionCreate(BaseModel):
    total_sentences: int


class SessionUpdate(BaseModel):
    completed_sentences: int
    # derived on the server; accepted for compatibility with older clients
    status: Optional[str] = None
    completed_at: Optional[datetime] = None


class RecordingSession(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    total_sentences: int
    completed_sentences: int
    status: str
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
