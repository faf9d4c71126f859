# sugartrack/routes/medication_routes.py
from flask import Blueprint
from sugartrack.controllers import medication_controller

medication_bp = Blueprint("medication", __name__)

medication_bp.route("/medication-log", methods=["POST"])(medication_controller.save_medication_log)
medication_bp.route("/medication/records", methods=["GET"])(medication_controller.get_medication_records)
