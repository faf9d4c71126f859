# sugartrack/routes/reminder_routes.py
from flask import Blueprint
from sugartrack.controllers import reminder_controller

reminder_bp = Blueprint("reminder", __name__)

reminder_bp.route("/test-reminder", methods=["POST"])(reminder_controller.trigger_daily_reminders)
reminder_bp.route("/test-single-reminder", methods=["POST"])(reminder_controller.send_single_reminder)
reminder_bp.route("/webhook", methods=["POST"])(reminder_controller.line_webhook)
