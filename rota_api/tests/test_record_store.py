"""RecordStore tests against the SQLite test database."""
from datetime import datetime, timedelta, timezone

from rota_api.record_store import StoreFailure, UpdateAck


def make_user(store, email="a@example.com", **extra):
    return store.create_record({
        "first_name": "A",
        "last_name": "B",
        "email": email,
        "password": "hash",
        **extra,
    })


def test_create_record_fills_lifecycle_fields(user_store):
    record = make_user(user_store)

    assert record["id"] >= 1
    assert record["is_active"] is True
    assert record["is_deleted"] is False
    assert record["time_stamp"] > 0
    assert record["shift_start_date"] is None


def test_read_records_filters_on_every_condition(user_store):
    first = make_user(user_store, "one@example.com")
    make_user(user_store, "two@example.com")

    assert [r["id"] for r in user_store.read_records({"email": "one@example.com"})] == [first["id"]]
    assert len(user_store.read_records({"is_active": True, "is_deleted": False})) == 2
    assert user_store.read_records({"email": "nobody@example.com"}) == []


def test_none_condition_matches_null(user_store):
    record = make_user(user_store)

    assert [r["id"] for r in user_store.read_records({"shift_start_date": None})] == [record["id"]]


def test_update_records_returns_ack(user_store):
    record = make_user(user_store)

    ack = user_store.update_records({"id": record["id"]}, {"shift_start_time": 8, "shift_end_time": 16})

    assert ack == UpdateAck(matched_count=1, modified_count=1)
    stored = user_store.read_records({"id": record["id"]})[0]
    assert (stored["shift_start_time"], stored["shift_end_time"]) == (8, 16)


def test_update_records_without_match_reports_zero(user_store):
    ack = user_store.update_records({"id": 999}, {"shift_start_time": 0})

    assert ack.matched_count == 0


def test_aware_datetime_is_stored_as_naive_utc(user_store):
    record = make_user(user_store)
    started = datetime(2022, 3, 1, 16, 30, tzinfo=timezone(timedelta(hours=2)))

    user_store.update_records({"id": record["id"]}, {"shift_start_date": started})

    stored = user_store.read_records({"id": record["id"]})[0]
    assert stored["shift_start_date"] == datetime(2022, 3, 1, 14, 30)
    # the value read back works as a write guard
    ack = user_store.update_records(
        {"id": record["id"], "shift_start_date": stored["shift_start_date"]},
        {"shift_end_time": 24},
    )
    assert ack.matched_count == 1


def test_delete_records_is_soft(user_store):
    record = make_user(user_store)

    ack = user_store.delete_records({"id": record["id"]})

    assert ack.matched_count == 1
    stored = user_store.read_records({"id": record["id"]})[0]
    assert stored["is_deleted"] is True
    assert stored["is_active"] is False


def test_unknown_column_returns_failure(user_store):
    result = user_store.read_records({"no_such_column": 1})

    assert isinstance(result, StoreFailure)
    assert result.failed is True
    assert result.error


def test_duplicate_email_returns_failure(user_store):
    make_user(user_store, "dup@example.com")

    result = make_user(user_store, "dup@example.com")

    assert isinstance(result, StoreFailure)
    assert result.conflict is True


def test_create_with_unknown_field_returns_failure(user_store):
    result = make_user(user_store, nickname="x")

    assert isinstance(result, StoreFailure)
    assert result.conflict is False
