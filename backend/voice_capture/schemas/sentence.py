from pydantic import BaseModel, ConfigDict
from typing import Literal, Optional
from datetime import datetime


class SentenceCreate(BaseModel):
    text: str


class SentenceUpdate(BaseModel):
    text: Optional[str] = None
    is_active: Optional[bool] = None


class Sentence(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    is_active: bool
    created_at: Optional[datetime] = None


class SentenceDeleteResult(BaseModel):
    id: int
    outcome: Literal["deleted", "deactivated"]
    message: str
