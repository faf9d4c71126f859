# sugartrack/routes/sugar_routes.py
from flask import Blueprint
from sugartrack.controllers import sugar_controller

sugar_bp = Blueprint("sugar", __name__)

sugar_bp.route("/sugar", methods=["POST"])(sugar_controller.save_sugar)
sugar_bp.route("/sugar/records", methods=["GET"])(sugar_controller.get_sugar_records)
sugar_bp.route("/sugar/<range_type>", methods=["GET"])(sugar_controller.get_sugar_chart)
