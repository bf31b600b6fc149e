from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    normalizer = container.normalizer

    @app.route("/api/leave/<user_id>", methods=["POST"], endpoint="api_create_leave")
    def api_create_leave(user_id: str):
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or not body.get("date"):
            raise ValidationError("date is required (YYYY-MM-DD)")
        entry = container.leave_service.create_leave(
            user_id,
            parse_iso_date(body["date"]),
            leave_type=body.get("type"),
            reason=body.get("reason"),
        )
        return jsonify({"success": True, "leave": entry.as_dict()}), 200

    @app.route("/api/leave/<user_id>", methods=["GET"], endpoint="api_list_leaves")
    def api_list_leaves(user_id: str):
        month = request.args.get("month") or normalizer.to_local(normalizer.now()).value.strftime("%Y-%m")
        entries = container.leave_service.leaves_in_month(user_id, month)
        return jsonify({"month": month, "leaves": [e.as_dict() for e in entries]}), 200
