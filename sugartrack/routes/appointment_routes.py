# sugartrack/routes/appointment_routes.py
from flask import Blueprint
from sugartrack.controllers import appointment_controller

appointment_bp = Blueprint("appointment", __name__)

appointment_bp.route("/appointment", methods=["POST"])(appointment_controller.save_appointment)
appointment_bp.route("/appointment", methods=["GET"])(appointment_controller.get_appointments)
appointment_bp.route("/appointment/records", methods=["GET"])(appointment_controller.get_appointment_records)
