from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users/<user_id>/settings/notifications", methods=["GET"], endpoint="api_get_notifications")
    def api_get_notifications(user_id: str):
        return jsonify(container.user_settings.get_notifications(user_id).as_dict()), 200

    @app.route("/api/users/<user_id>/settings/notifications", methods=["PUT"], endpoint="api_put_notifications")
    def api_put_notifications(user_id: str):
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("JSON object expected")
        settings = container.user_settings.update_notifications(
            user_id,
            enable_check_in_reminders=body.get("enableCheckInReminders"),
            enable_check_out_reminders=body.get("enableCheckOutReminders"),
        )
        return jsonify(settings.as_dict()), 200
