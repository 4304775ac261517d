from pydantic import BaseModel, ConfigDict
from typing import Literal, Optional


class SignUpRequest(BaseModel):
    email: str
    password: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    state: Optional[str] = None
    mother_tongue: Optional[str] = None


class SignInRequest(BaseModel):
    email: str
    password: str


class AdminAuthRequest(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: Optional[str] = None


class AdminOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class AuthResponse(BaseModel):
    user: UserOut
    token: str


class AdminAuthResponse(BaseModel):
    admin: AdminOut
    token: str


class Principal(BaseModel):
    """The decoded bearer credential of a request."""

    id: str
    kind: Literal["user", "admin"]
    email: Optional[str] = None
    username: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.kind == "admin"
