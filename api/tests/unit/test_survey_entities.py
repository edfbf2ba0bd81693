from datetime import datetime, timezone

import pytest

from nps_sync.domain.entities.survey import HomeRecord, SurveyRecord, UserRecord


def test_survey_from_document_maps_firestore_fields(survey_data):
    record = SurveyRecord.from_document("doc-1", survey_data)

    assert record.survey_id == "doc-1"
    assert record.home_ref == "H1"
    assert record.user_ref == "U1"
    assert record.round_tag == "home"
    assert record.score == 9
    assert record.comment == "Great stay"
    assert record.submitted_at == datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)


def test_survey_from_document_applies_defaults():
    record = SurveyRecord.from_document("doc-2", {"hid": "H9", "uid": "U9", "round": "home", "nps": None, "comment": None})

    assert record.score == 0
    assert record.comment == ""
    assert record.submitted_at is None


def test_survey_from_document_rejects_invalid_date():
    with pytest.raises(ValueError):
        SurveyRecord.from_document("doc-3", {"hid": "H1", "uid": "U1", "round": "home", "date": "no es fecha"})


def test_home_and_user_from_document():
    home = HomeRecord.from_document({"hid": "H1", "name": "Villa Azul"})
    user = UserRecord.from_document({"uid": "U1", "name": "Jane Doe"})

    assert home.display_name == "Villa Azul"
    assert home.location is None
    assert user.display_name == "Jane Doe"


def test_survey_from_document_keeps_fractional_score():
    record = SurveyRecord.from_document("doc-4", {"hid": "H1", "uid": "U1", "round": "home", "nps": 8.5})

    assert record.score == 8.5


def test_survey_from_document_rejects_non_numeric_score():
    with pytest.raises(ValueError):
        SurveyRecord.from_document("doc-5", {"hid": "H1", "uid": "U1", "round": "home", "nps": "muy bueno"})
