from __future__ import annotations

from datetime import date, time

import pytest

from shift_tracker.common.clock import FixedClock
from shift_tracker.container import wire
from shift_tracker.core.exceptions import StorageError
from shift_tracker.main import create_app
from tests.fakes import (
    InMemoryAttendance,
    InMemoryHolidays,
    InMemoryLeaves,
    InMemoryRecipients,
    InMemoryUserSettings,
    RecordingNotifier,
    utc,
)

AUTH = {"Authorization": "Bearer test-cron-secret"}


@pytest.fixture
def clock():
    return FixedClock(utc(2025, 6, 17, 2, 0))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def container(clock, notifier):
    return wire(
        attendance_repo=InMemoryAttendance(),
        holidays_repo=InMemoryHolidays({date(2025, 6, 3): "Queen's Birthday"}),
        recipients=InMemoryRecipients(["u1", "u2"]),
        leaves_repo=InMemoryLeaves(),
        settings_repo=InMemoryUserSettings(),
        notifier=notifier,
        clock=clock,
    )


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def test_check_in_and_out_flow(client, clock):
    res = client.post("/api/attendance/u1/check-in")
    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["timing"] == "ON_TIME"
    assert body["check_in_local"] == "2025-06-17T09:00:00+07:00"
    assert body["expected_completion_local"] == "2025-06-17T18:00:00+07:00"

    body = client.get("/api/attendance/u1/today").get_json()
    assert body["record"]["status"] == "CHECKED_IN"
    assert body["record"]["work_date"] == "2025-06-17"
    assert body["work_state"] == "in_progress"

    clock.advance(hours=9, minutes=30)
    body = client.post("/api/attendance/u1/check-out").get_json()
    assert body["success"] is True
    assert body["actual_hours"] == 9.5
    assert body["is_complete"] is True

    body = client.post("/api/attendance/u1/check-out").get_json()
    assert body["success"] is False
    assert body["reason"] == "already_checked_out"


def test_rejection_is_a_normal_response(client, clock):
    clock.set(utc(2025, 6, 14, 2, 0))  # Saturday

    res = client.post("/api/attendance/u1/check-in")

    assert res.status_code == 200
    assert res.get_json() == {
        "success": False,
        "reason": "non_working_day",
        "work_date": "2025-06-14",
        "check_in_time": None,
        "check_in_local": None,
        "expected_completion": None,
        "expected_completion_local": None,
        "timing": None,
        "reopened": False,
    }


def test_today_without_record(client):
    assert client.get("/api/attendance/u1/today").get_json() == {"record": None}


def test_monthly_report_defaults_to_current_month(client):
    client.post("/api/attendance/u1/check-in")

    body = client.get("/api/attendance/u1/report").get_json()

    assert body["month"] == "2025-06"
    assert body["total_days_worked"] == 1
    assert body["working_days_in_month"] == 20


def test_invalid_month_is_bad_request(client):
    res = client.get("/api/attendance/u1/report?month=June")

    assert res.status_code == 400
    assert res.get_json()["error"] == "invalid_request"


def test_cron_requires_secret(client):
    assert client.get("/api/cron/checkout-reminder").status_code == 401
    res = client.get("/api/cron/checkout-reminder", headers={"Authorization": "Bearer wrong"})
    assert res.status_code == 401
    assert res.get_json() == {"error": "unauthorized"}


def test_checkout_reminder_cron(client, clock, notifier):
    clock.set(utc(2025, 6, 17, 1, 43))
    client.post("/api/attendance/u1/check-in")
    clock.set(utc(2025, 6, 17, 10, 33, 30))

    res = client.get("/api/cron/checkout-reminder", headers=AUTH)

    assert res.status_code == 200
    body = res.get_json()
    assert body["checked"] == 1
    assert body["sent"] == 1
    assert body["events"][0]["kind"] == "PRE_COMPLETION"
    assert [e.user_id for e in notifier.events] == ["u1"]


def test_check_in_reminder_cron(client, clock, notifier):
    clock.set(utc(2025, 6, 17, 1, 30))  # 08:30 local
    client.post("/api/attendance/u1/check-in")

    body = client.get("/api/cron/check-in-reminder", headers=AUTH).get_json()

    assert body["sent"] == 1
    assert body["events"][0]["user_id"] == "u2"


def test_auto_checkout_cron_closes_yesterday(client, clock):
    clock.set(utc(2025, 6, 16, 2, 0))  # Monday 09:00 local
    client.post("/api/attendance/u1/check-in")
    clock.set(utc(2025, 6, 16, 17, 5))  # Tuesday 00:05 local

    body = client.get("/api/cron/auto-checkout", headers=AUTH).get_json()

    assert body["work_date"] == "2025-06-16"
    assert body["processed"] == 1
    assert body["closed"] == 1
    assert body["results"][0]["worked_hours"] == 15.0


def test_auto_checkout_cron_with_explicit_date(client):
    body = client.get("/api/cron/auto-checkout?date=2025-06-10", headers=AUTH).get_json()
    assert body == {"work_date": "2025-06-10", "processed": 0, "closed": 0, "skipped": 0, "results": []}

    res = client.get("/api/cron/auto-checkout?date=10-06-2025", headers=AUTH)
    assert res.status_code == 400


def test_correct_record_route(client, clock):
    client.post("/api/attendance/u1/check-in")

    res = client.put(
        "/api/attendance/u1/records/2025-06-17",
        json={"check_in_time": "2025-06-17T08:30:00+07:00", "check_out_time": "2025-06-17T10:45:00Z"},
    )

    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["record"]["status"] == "CHECKED_OUT"
    assert body["record"]["check_in_time"] == "2025-06-17T01:30:00+00:00"
    assert body["actual_hours"] == 9.25
    assert body["is_complete"] is True


def test_correct_record_route_rejects_bad_input(client):
    client.post("/api/attendance/u1/check-in")

    inverted = client.put(
        "/api/attendance/u1/records/2025-06-17",
        json={"check_in_time": "2025-06-17T10:00:00Z", "check_out_time": "2025-06-17T09:00:00Z"},
    )
    assert inverted.status_code == 400
    assert client.put("/api/attendance/u1/records/2025-06-17", json={}).status_code == 400

    missing = client.put("/api/attendance/u2/records/2025-06-17", json={"check_in_time": "2025-06-17T02:00:00Z"})
    assert missing.status_code == 200
    assert missing.get_json()["reason"] == "no_record"


def test_leave_routes(client):
    res = client.post("/api/leave/u1", json={"date": "2025-06-18", "type": "sick", "reason": "flu"})

    assert res.status_code == 200
    assert res.get_json()["leave"]["type"] == "sick"

    duplicate = client.post("/api/leave/u1", json={"date": "2025-06-18"})
    assert duplicate.status_code == 409
    assert duplicate.get_json()["error"] == "conflict"

    assert client.post("/api/leave/u1", json={"type": "sick"}).status_code == 400

    body = client.get("/api/leave/u1").get_json()
    assert body["month"] == "2025-06"
    assert [e["date"] for e in body["leaves"]] == ["2025-06-18"]


def test_notification_settings_routes(client):
    body = client.get("/api/users/u1/settings/notifications").get_json()
    assert body == {"user_id": "u1", "enableCheckInReminders": True, "enableCheckOutReminders": True}

    res = client.put("/api/users/u1/settings/notifications", json={"enableCheckOutReminders": False})
    assert res.status_code == 200
    assert res.get_json()["enableCheckOutReminders"] is False

    bad = client.put("/api/users/u1/settings/notifications", json={"enableCheckOutReminders": "off"})
    assert bad.status_code == 400


def test_checkout_reminder_cron_skips_opted_out_user(client, clock, notifier):
    clock.set(utc(2025, 6, 17, 1, 43))
    client.post("/api/attendance/u1/check-in")
    client.put("/api/users/u1/settings/notifications", json={"enableCheckOutReminders": False})
    clock.set(utc(2025, 6, 17, 10, 33, 30))

    body = client.get("/api/cron/checkout-reminder", headers=AUTH).get_json()

    assert body["sent"] == 0
    assert body["skipped"] == ["u1"]
    assert notifier.events == []


class UnreachableAttendance(InMemoryAttendance):
    def get_for_user_and_date(self, user_id, work_date):
        raise StorageError("connection refused")


def test_storage_failure_is_service_unavailable(monkeypatch, clock):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        attendance_repo=UnreachableAttendance(),
        holidays_repo=InMemoryHolidays(),
        recipients=InMemoryRecipients(),
        leaves_repo=InMemoryLeaves(),
        settings_repo=InMemoryUserSettings(),
        clock=clock,
    )
    client = create_app(container).test_client()

    res = client.post("/api/attendance/u1/check-in")

    assert res.status_code == 503
    assert res.get_json() == {"error": "storage_unavailable", "retryable": True}
