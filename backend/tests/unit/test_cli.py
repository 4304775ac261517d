from unittest.mock import patch
from sqlalchemy.orm import sessionmaker
from voice_capture import cli
from voice_capture.services import identity


def test_create_admin_command(test_db, capsys):
    bind = test_db.get_bind()
    with patch("voice_capture.cli.engine", bind), patch(
        "voice_capture.cli.SessionLocal", sessionmaker(bind=bind)
    ):
        assert cli.main(["create-admin", "--username", "root", "--password", "pw"]) == 0

    assert "root" in capsys.readouterr().out
    admin, _ = identity.authenticate_admin(test_db, "root", "pw")
    assert admin.username == "root"


def test_create_admin_prompts_for_password(test_db):
    bind = test_db.get_bind()
    with patch("voice_capture.cli.engine", bind), patch(
        "voice_capture.cli.SessionLocal", sessionmaker(bind=bind)
    ), patch("voice_capture.cli.getpass.getpass", return_value=""):
        assert cli.main(["create-admin"]) == 1
