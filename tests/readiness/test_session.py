from datetime import datetime, timezone

import pytest

from services.readiness_engine.models import InvalidScoreError, SessionFrozenError, UnknownCategoryError
from services.readiness_engine.session import SurveySession


def test_new_session_starts_neutral(small_catalog):
    session = SurveySession(small_catalog)
    assert dict(session.snapshot()) == {"Alpha": (2, 2, 2), "Beta": (2, 2)}
    assert not session.frozen
    assert session.completed_at is None


def test_set_score_updates_one_cell(small_catalog):
    session = SurveySession(small_catalog)
    session.set_score("Alpha", 1, 4)
    assert session.get_score("Alpha", 1) == 4
    assert session.snapshot()["Alpha"] == (2, 4, 2)


def test_snapshot_is_read_only(small_catalog):
    snapshot = SurveySession(small_catalog).snapshot()
    with pytest.raises(TypeError):
        snapshot["Alpha"] = (0, 0, 0)


def test_invalid_edits_are_rejected(small_catalog):
    session = SurveySession(small_catalog)
    with pytest.raises(UnknownCategoryError):
        session.set_score("Gamma", 0, 1)
    with pytest.raises(IndexError):
        session.set_score("Beta", 2, 1)
    with pytest.raises(InvalidScoreError):
        session.set_score("Beta", 0, 5)


def test_freeze_stamps_time_and_blocks_edits(small_catalog):
    session = SurveySession(small_catalog, user_info={"email": "a@b.c"})
    session.set_score("Beta", 0, 0)
    stamp = datetime(2025, 2, 1, 12, 0, tzinfo=timezone.utc)

    final = session.freeze(completed_at=stamp)

    assert session.frozen
    assert session.completed_at == stamp
    assert final["Beta"] == (0, 2)
    with pytest.raises(SessionFrozenError):
        session.set_score("Beta", 1, 0)


def test_freeze_twice_keeps_first_timestamp(small_catalog):
    session = SurveySession(small_catalog)
    first = datetime(2025, 2, 1, tzinfo=timezone.utc)
    session.freeze(completed_at=first)
    session.freeze(completed_at=datetime(2025, 3, 1, tzinfo=timezone.utc))
    assert session.completed_at == first


def test_restart_clears_everything(small_catalog):
    session = SurveySession(small_catalog, user_info={"company": "Acme"})
    session.set_score("Alpha", 0, 0)
    session.freeze()

    session.restart()

    assert not session.frozen
    assert session.completed_at is None
    assert session.user_info == {}
    assert session.snapshot()["Alpha"] == (2, 2, 2)
    session.set_score("Alpha", 0, 1)
