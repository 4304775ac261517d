from unittest.mock import patch
from voice_capture.core.config import DEFAULT_DATABASE_URL
from voice_capture.db import base


def test_data_dir_created_for_default_url(tmp_path):
    data_dir = tmp_path / "data"
    with patch("voice_capture.db.base.DATA_DIR", data_dir):
        assert base.prepare_data_dir(DEFAULT_DATABASE_URL) is True
    assert data_dir.is_dir()


def test_data_dir_untouched_for_other_url(tmp_path):
    data_dir = tmp_path / "data"
    with patch("voice_capture.db.base.DATA_DIR", data_dir):
        assert base.prepare_data_dir("postgresql://db.internal/voice") is False
        assert base.prepare_data_dir(f"sqlite:///{tmp_path.as_posix()}/other.db") is False
    assert not data_dir.exists()
