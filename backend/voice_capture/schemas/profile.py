from pydantic import BaseModel, ConfigDict
from typing import Optional


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    state: Optional[str] = None
    mother_tongue: Optional[str] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    state: Optional[str] = None
    mother_tongue: Optional[str] = None
