import aiofiles
import io
import time
import wave
from uuid import uuid4
from werkzeug.utils import secure_filename
from voice_capture.core.config import settings
from voice_capture.core.logger import get_logger

UPLOADS_DIR = settings.UPLOADS_DIR
UPLOADS_DIR.mkdir(parents=True, exist_ok=True)

DEFAULT_FILENAME = "recording.webm"

logger = get_logger(__name__)


def storage_filename(original_name: str | None) -> str:
    """Build a globally unique file name for an uploaded blob.

    The name is never parsed back; it only has to be unique and safe on disk.
    """
    base = secure_filename(original_name or "")
    if not base:
        base = DEFAULT_FILENAME
    millis = int(time.time() * 1000)
    return f"{millis}-{uuid4().hex[:8]}-{base}"


def wav_duration(data: bytes) -> float | None:
    """Duration in seconds of a WAV payload, or None for other formats."""
    if not data.startswith(b"RIFF"):
        return None
    try:
        with wave.open(io.BytesIO(data), "rb") as wav_file:
            rate = wav_file.getframerate()
            if not rate:
                return None
            return wav_file.getnframes() / rate
    except (wave.Error, EOFError):
        return None


async def save_audio(data: bytes, original_name: str | None) -> str:
    """Write an audio blob to the uploads directory.

    Args:
        data (bytes): The audio payload.
        original_name (str | None): File name sent by the client.
    Returns:
        str: The public URL of the stored file.
    """
    filename = storage_filename(original_name)
    file_path = UPLOADS_DIR / filename
    async with aiofiles.open(file_path, "wb") as out:
        await out.write(data)
    logger.debug(f"Stored {len(data)} bytes at {file_path}")
    return f"{settings.UPLOADS_URL_PREFIX}/{filename}"
