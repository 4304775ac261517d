import pytest
from unittest.mock import patch
from voice_capture.core.errors import BadRequest, NotFound
from voice_capture.db.models import Recording, Sentence
from voice_capture.services import catalog


def _add_recording(db, sentence_id, rec_id="someone_1"):
    db.add(
        Recording(
            id=rec_id,
            user_id=None,
            sentence_id=sentence_id,
            audio_url="/uploads/x.webm",
            status="accepted",
        )
    )
    db.commit()


def test_list_active_keeps_creation_order(test_db):
    catalog.create(test_db, "Zebra crossings are striped.")
    middle = catalog.create(test_db, "Apples are red.")
    catalog.create(test_db, "Mangoes ripen in summer.")
    catalog.update(test_db, middle.id, active=False)

    texts = [s.text for s in catalog.list_active(test_db)]
    assert texts == ["Zebra crossings are striped.", "Mangoes ripen in summer."]
    assert [s.text for s in catalog.list_active(test_db)] == texts


def test_create_blank_text(test_db):
    with pytest.raises(BadRequest):
        catalog.create(test_db, "   ")


def test_update_text_and_flag(test_db):
    sentence = catalog.create(test_db, "Hello")
    updated = catalog.update(test_db, sentence.id, text="Hello there", active=False)
    assert updated.text == "Hello there"
    assert updated.is_active is False


def test_update_unknown(test_db):
    with pytest.raises(NotFound):
        catalog.update(test_db, 999, text="x")


def test_delete_unreferenced_removes_row(test_db):
    sentence = catalog.create(test_db, "Hello")
    assert catalog.delete(test_db, sentence.id) == catalog.DELETED
    assert test_db.get(Sentence, sentence.id) is None


def test_delete_referenced_deactivates(test_db):
    sentence = catalog.create(test_db, "Hello")
    for i in range(3):
        _add_recording(test_db, sentence.id, rec_id=f"someone_{i}")

    assert catalog.delete(test_db, sentence.id) == catalog.DEACTIVATED
    kept = test_db.get(Sentence, sentence.id)
    assert kept is not None
    assert kept.is_active is False
    assert test_db.query(Recording).count() == 3


def test_delete_unknown(test_db):
    with pytest.raises(NotFound):
        catalog.delete(test_db, 42)


def test_delete_sees_recording_added_after_lookup(test_db):
    sentence = catalog.create(test_db, "Hello")
    lookup = catalog.get

    def lookup_then_record(db, sentence_id):
        found = lookup(db, sentence_id)
        # a submission lands between the lookup and the delete
        _add_recording(db, sentence_id)
        return found

    with patch("voice_capture.services.catalog.get", side_effect=lookup_then_record):
        assert catalog.delete(test_db, sentence.id) == catalog.DEACTIVATED

    kept = test_db.get(Sentence, sentence.id)
    assert kept is not None
    assert kept.is_active is False
    assert test_db.query(Recording).count() == 1
