from flask import current_app, jsonify, request

from sugartrack.errors import ValidationError
from sugartrack.helpers import api_response


def _reminders():
    return current_app.config["REMINDER_SERVICE"]


def trigger_daily_reminders():
    """Run the daily reminder pass now, with the same selection as the scheduled job."""
    summary = _reminders().send_daily_reminders()
    if "error" in summary:
        return api_response(False, summary["error"], summary)

    return api_response(True, "Daily reminders sent successfully", summary)


def send_single_reminder():
    data = request.get_json(silent=True) or {}
    user_id = (str(data.get("userId") or "")).strip()
    if not user_id:
        raise ValidationError(["userId"], "userId is required")

    sent = _reminders().send_test_reminder(user_id)
    return jsonify({
        "success": sent,
        "message": "Test reminder sent" if sent else "Failed to send reminder",
    }), 200


def line_webhook():
    current_app.logger.info("Received webhook from LINE: %s", request.get_json(silent=True))
    return "OK", 200
