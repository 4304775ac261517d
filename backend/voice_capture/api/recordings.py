from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from typing import List, Optional
from voice_capture.api.deps import require_user
from voice_capture.core.config import settings
from voice_capture.core.errors import BadRequest, Forbidden
from voice_capture.db.base import get_db
from voice_capture.db.models import Recording as RecordingModel
from voice_capture.schemas.auth import Principal
from voice_capture.schemas.recording import Recording, UserRecording
from voice_capture.services import submissions
from voice_capture.services.submissions import SubmissionPipeline

router = APIRouter(prefix="/recordings", tags=["recordings"])
pipeline = SubmissionPipeline()


@router.post("", response_model=Recording)
async def upload_recording(
    sentence_id: int = Form(...),
    status: str = Form(...),
    attempt_number: int = Form(1),
    duration_seconds: Optional[float] = Form(None),
    audio: Optional[UploadFile] = File(None),
    principal: Principal = Depends(require_user),
    db: Session = Depends(get_db),
) -> RecordingModel:
    """Submit one recorded take.

    Args:
        sentence_id (int): The sentence that was read.
        status (str): ``accepted`` or ``rejected``.
        attempt_number (int, optional): Client-side attempt counter. Defaults to 1.
        duration_seconds (float | None, optional): Client-measured duration.
        audio (UploadFile | None, optional): The audio blob.
        principal (Principal, optional): The caller. Defaults to Depends(require_user).
        db (Session, optional): The database session. Defaults to Depends(get_db).
    Returns:
        Recording: The persisted submission.
    """
    data = None
    filename = None
    if audio is not None:
        # size is known for spooled multipart files, refuse before buffering
        if audio.size is not None and audio.size > settings.MAX_UPLOAD_BYTES:
            raise BadRequest("Audio file too large")
        data = await audio.read()
        filename = audio.filename
    return await pipeline.submit(
        db,
        principal.id,
        sentence_id,
        status,
        data,
        filename=filename,
        attempt_number=attempt_number,
        duration_seconds=duration_seconds,
    )


@router.get("", response_model=List[UserRecording])
def my_recordings(
    principal: Principal = Depends(require_user), db: Session = Depends(get_db)
) -> List[dict]:
    return submissions.list_for_user(db, principal.id)


@router.get("/user/{user_id}", response_model=List[UserRecording])
def user_recordings(
    user_id: str,
    principal: Principal = Depends(require_user),
    db: Session = Depends(get_db),
) -> List[dict]:
    if user_id != principal.id:
        raise Forbidden("Cannot read another user's recordings")
    return submissions.list_for_user(db, user_id)
