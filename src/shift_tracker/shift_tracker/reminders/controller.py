from __future__ import annotations

import hmac
import logging
from datetime import timedelta
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def cron_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            secret = app.config.get("CRON_SECRET") or ""
            supplied = request.headers.get("Authorization", "")
            if not secret or not hmac.compare_digest(supplied, f"Bearer {secret}"):
                logger.warning("rejected cron call to %s", request.path)
                return jsonify({"error": "unauthorized"}), 401
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/cron/checkout-reminder", methods=["GET"], endpoint="cron_checkout_reminder")
    @cron_required
    def cron_checkout_reminder():
        result = container.reminder_poller.poll()
        return jsonify(result.as_dict()), 200

    @app.route("/api/cron/check-in-reminder", methods=["GET"], endpoint="cron_check_in_reminder")
    @cron_required
    def cron_check_in_reminder():
        result = container.check_in_reminders.poll()
        return jsonify(result.as_dict()), 200

    @app.route("/api/cron/auto-checkout", methods=["GET"], endpoint="cron_auto_checkout")
    @cron_required
    def cron_auto_checkout():
        # Runs just after local midnight and closes the day that just ended.
        normalizer = container.normalizer
        if request.args.get("date"):
            work_date = parse_iso_date(request.args["date"])
        else:
            work_date = normalizer.local_date(normalizer.now()) - timedelta(days=1)
        results = container.attendance_service.auto_checkout(work_date)
        return jsonify(
            {
                "work_date": work_date.isoformat(),
                "processed": len(results),
                "closed": sum(1 for r in results if r.closed),
                "skipped": sum(1 for r in results if not r.closed),
                "results": [
                    {
                        "user_id": r.user_id,
                        "closed": r.closed,
                        "check_in_time": r.check_in_time.isoformat(),
                        "check_out_time": r.check_out_time.isoformat() if r.check_out_time else None,
                        "worked_hours": r.worked_hours,
                    }
                    for r in results
                ],
            }
        ), 200
