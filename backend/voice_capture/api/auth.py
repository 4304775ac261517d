from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from voice_capture.db.base import get_db
from voice_capture.schemas.auth import AuthResponse, SignInRequest, SignUpRequest
from voice_capture.services import identity

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse)
def signup(body: SignUpRequest, db: Session = Depends(get_db)) -> dict:
    """Register a user.

    Args:
        body (SignUpRequest): Email, password and optional profile fields.
        db (Session, optional): The database session. Defaults to Depends(get_db).
    Returns:
        dict: The new user and its bearer token.
    """
    user, token = identity.register(
        db,
        body.email,
        body.password,
        **body.model_dump(exclude={"email", "password"}, exclude_none=True),
    )
    return {"user": user, "token": token}


@router.post("/signin", response_model=AuthResponse)
def signin(body: SignInRequest, db: Session = Depends(get_db)) -> dict:
    user, token = identity.authenticate(db, body.email, body.password)
    return {"user": user, "token": token}
