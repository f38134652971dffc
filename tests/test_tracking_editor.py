from datetime import date, datetime, timedelta, timezone

import pytest

from liftlog.core.enums import EditStatus
from liftlog.core.exceptions import (
    EmptySessionError,
    InvalidDateError,
    InvalidTransitionError,
    RecordNotFoundError,
    RemoteWriteError,
)
from liftlog.schemas.tracking import SetResult, TrackingRecord
from liftlog.services.set_series_codec import decode
from liftlog.services.tracking_editor import TrackingEditor
from tests.fakes import OWNER_ID

UTC_PLUS_2 = timezone(timedelta(hours=2))
# Stored at 09:30, not midday: an edit must not move it
LOADED_AT = datetime(2024, 1, 5, 9, 30, tzinfo=UTC_PLUS_2)


def _record(sets_data='[{"reps":10,"weight":60.0}]', record_id="trk-1"):
    return TrackingRecord(
        id=record_id,
        owner_id=OWNER_ID,
        exercise_id="ex1",
        exercise_name="Squat",
        performed_at=LOADED_AT,
        sets_data=sets_data,
    )


@pytest.fixture
def stored(fake_repo):
    record = _record()
    fake_repo.seed(record)
    return record


def test_load_decodes_sets(fake_repo, stored):
    editor = TrackingEditor.load(fake_repo, stored)
    assert editor.status is EditStatus.EDITING
    assert editor.sets == (SetResult(reps=10, weight=60.0),)
    assert editor.performed_at == LOADED_AT


def test_corrupted_record_opens_with_zero_sets(fake_repo):
    editor = TrackingEditor.load(fake_repo, _record(sets_data="{oops"))
    assert editor.sets == ()
    assert editor.status is EditStatus.EDITING


async def test_commit_keeps_identity_owner_and_loaded_date(fake_repo, stored):
    editor = TrackingEditor.load(fake_repo, stored)
    assert editor.add_set("8", "62,5").ok

    committed = await editor.commit()

    assert editor.status is EditStatus.COMMITTED
    assert committed.id == stored.id
    assert committed.owner_id == OWNER_ID
    assert committed.exercise_name == "Squat"
    assert committed.performed_at == LOADED_AT
    assert decode(committed.sets_data) == (SetResult(reps=10, weight=60.0), SetResult(reps=8, weight=62.5))
    assert fake_repo.records[stored.id] == committed
    assert len(fake_repo.update_calls) == 1


async def test_set_date_normalizes_new_choice(fake_repo, stored):
    editor = TrackingEditor.load(fake_repo, stored)
    outcome = editor.set_date(datetime(2024, 1, 7, 21, 45, tzinfo=UTC_PLUS_2))
    assert outcome.ok
    assert editor.performed_at == datetime(2024, 1, 7, 12, 0, tzinfo=UTC_PLUS_2)

    committed = await editor.commit()
    assert committed.performed_at == datetime(2024, 1, 7, 12, 0, tzinfo=UTC_PLUS_2)


def test_set_date_rejects_non_date(fake_repo, stored):
    editor = TrackingEditor.load(fake_repo, stored)
    outcome = editor.set_date("not a date")
    assert not outcome.ok
    assert isinstance(outcome.error, InvalidDateError)
    assert editor.performed_at == LOADED_AT


def test_rejected_set_is_not_added(fake_repo, stored):
    editor = TrackingEditor.load(fake_repo, stored)
    outcome = editor.add_set(0, 60)
    assert not outcome.ok
    assert editor.sets == (SetResult(reps=10, weight=60.0),)


async def test_commit_of_empty_series_is_rejected(fake_repo):
    record = _record(sets_data="corrupted")
    fake_repo.seed(record)
    editor = TrackingEditor.load(fake_repo, record)

    with pytest.raises(EmptySessionError):
        await editor.commit()

    assert editor.status is EditStatus.EDITING
    assert fake_repo.update_calls == []


async def test_repairing_corrupted_record(fake_repo):
    record = _record(sets_data="corrupted")
    fake_repo.seed(record)
    editor = TrackingEditor.load(fake_repo, record)
    editor.add_set(5, 100)

    committed = await editor.commit()

    assert decode(committed.sets_data) == (SetResult(reps=5, weight=100.0),)


async def test_remote_failure_keeps_edits(fake_repo, stored):
    fake_repo.fail_with = RemoteWriteError("network down")
    editor = TrackingEditor.load(fake_repo, stored)
    editor.add_set(8, 65)

    with pytest.raises(RemoteWriteError):
        await editor.commit()

    assert editor.status is EditStatus.EDITING
    assert len(editor.sets) == 2
    assert fake_repo.records[stored.id] == stored

    committed = await editor.commit()
    assert editor.status is EditStatus.COMMITTED
    assert len(decode(committed.sets_data)) == 2


async def test_commit_of_deleted_record(fake_repo):
    editor = TrackingEditor.load(fake_repo, _record(record_id="gone"))
    with pytest.raises(RecordNotFoundError):
        await editor.commit()
    assert editor.status is EditStatus.EDITING


async def test_no_edits_after_commit(fake_repo, stored):
    editor = TrackingEditor.load(fake_repo, stored)
    await editor.commit()

    with pytest.raises(InvalidTransitionError):
        editor.add_set(5, 50)
    with pytest.raises(InvalidTransitionError):
        editor.set_date(date(2024, 2, 1))
    with pytest.raises(InvalidTransitionError):
        await editor.commit()
