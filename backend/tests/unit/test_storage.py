import io
import wave
import pytest
from voice_capture.services import storage


def test_storage_filename_sanitises_and_is_unique():
    first = storage.storage_filename("my take (1).webm")
    second = storage.storage_filename("my take (1).webm")
    assert first != second
    assert first.endswith("-my_take_1.webm")
    assert storage.storage_filename("../../etc/passwd").endswith("-etc_passwd")


def test_storage_filename_default():
    assert storage.storage_filename(None).endswith(storage.DEFAULT_FILENAME)
    assert storage.storage_filename("...").endswith(storage.DEFAULT_FILENAME)


def test_wav_duration():
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wav_file:
        wav_file.setnchannels(2)
        wav_file.setsampwidth(2)
        wav_file.setframerate(16000)
        wav_file.writeframes(b"\x00\x00\x00\x00" * 16000)
    assert storage.wav_duration(buf.getvalue()) == pytest.approx(1.0)


def test_wav_duration_other_formats():
    assert storage.wav_duration(b"OggS....") is None
    assert storage.wav_duration(b"RIFF\x00\x00garbage") is None


@pytest.mark.asyncio
async def test_save_audio_writes_file(mock_uploads_dir):
    url = await storage.save_audio(b"abc", "take.webm")
    assert url.startswith("/uploads/")
    filename = url.rsplit("/", 1)[1]
    assert (mock_uploads_dir / filename).read_bytes() == b"abc"
