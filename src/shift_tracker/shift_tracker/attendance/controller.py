from __future__ import annotations

from datetime import datetime
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, CheckInOutcome, CheckOutOutcome, CorrectionOutcome


def register(app: Flask, container: Container) -> None:
    normalizer = container.normalizer

    def iso(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

    def local_iso(value: Optional[datetime]) -> Optional[str]:
        return str(normalizer.to_local(value)) if value else None

    def record_json(record: Optional[AttendanceRecord]) -> Optional[dict]:
        if record is None:
            return None
        return {
            "user_id": record.user_id,
            "work_date": record.work_date_key,
            "check_in_time": iso(record.check_in_time),
            "check_out_time": iso(record.check_out_time),
            "status": record.status.value,
        }

    def check_in_json(outcome: CheckInOutcome) -> dict:
        return {
            "success": outcome.accepted,
            "reason": outcome.reason.value if outcome.reason else None,
            "work_date": outcome.work_date.isoformat(),
            "check_in_time": iso(outcome.check_in_time),
            "check_in_local": local_iso(outcome.check_in_time),
            "expected_completion": iso(outcome.expected_completion),
            "expected_completion_local": local_iso(outcome.expected_completion),
            "timing": outcome.timing.value if outcome.timing else None,
            "reopened": outcome.reopened,
        }

    def check_out_json(outcome: CheckOutOutcome) -> dict:
        return {
            "success": outcome.accepted,
            "reason": outcome.reason.value if outcome.reason else None,
            "work_date": outcome.work_date.isoformat(),
            "check_in_time": iso(outcome.check_in_time),
            "check_out_time": iso(outcome.check_out_time),
            "check_out_local": local_iso(outcome.check_out_time),
            "actual_hours": outcome.actual_hours,
            "is_complete": outcome.is_complete,
            "shortfall_hours": outcome.shortfall_hours,
        }

    def correction_json(outcome: CorrectionOutcome) -> dict:
        return {
            "success": outcome.accepted,
            "reason": outcome.reason.value if outcome.reason else None,
            "work_date": outcome.work_date.isoformat(),
            "record": record_json(outcome.record),
            "actual_hours": outcome.actual_hours,
            "is_complete": outcome.is_complete,
        }

    @app.route("/api/attendance/<user_id>/check-in", methods=["POST"], endpoint="api_check_in")
    def api_check_in(user_id: str):
        outcome = container.attendance_service.check_in(user_id)
        return jsonify(check_in_json(outcome)), 200

    @app.route("/api/attendance/<user_id>/check-out", methods=["POST"], endpoint="api_check_out")
    def api_check_out(user_id: str):
        outcome = container.attendance_service.check_out(user_id)
        return jsonify(check_out_json(outcome)), 200

    @app.route("/api/attendance/<user_id>/today", methods=["GET"], endpoint="api_today")
    def api_today(user_id: str):
        record = container.attendance_service.get_today(user_id)
        payload = {"record": record_json(record)}
        if record is not None:
            hours = container.policy.working_hours(record.check_in_time, record.check_out_time)
            payload["expected_completion"] = iso(hours.expected_completion)
            payload["work_state"] = hours.state.value
            payload["actual_hours"] = hours.actual_hours
        return jsonify(payload), 200

    @app.route("/api/attendance/<user_id>/report", methods=["GET"], endpoint="api_monthly_report")
    def api_monthly_report(user_id: str):
        month = request.args.get("month") or normalizer.to_local(normalizer.now()).value.strftime("%Y-%m")
        report = container.monthly_reports.build_monthly_report(user_id, month)
        return jsonify(report.as_dict()), 200

    @app.route("/api/attendance/<user_id>/records/<work_date>", methods=["PUT"], endpoint="api_correct_record")
    def api_correct_record(user_id: str, work_date: str):
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or not body.get("check_in_time"):
            raise ValidationError("check_in_time is required")
        check_out = body.get("check_out_time")
        outcome = container.attendance_service.correct(
            user_id,
            parse_iso_date(work_date),
            check_in_time=parse_iso_datetime(body["check_in_time"]),
            check_out_time=parse_iso_datetime(check_out) if check_out else None,
        )
        return jsonify(correction_json(outcome)), 200
