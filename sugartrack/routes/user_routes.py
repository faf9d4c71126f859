# sugartrack/routes/user_routes.py
from flask import Blueprint
from sugartrack.controllers import user_controller

user_bp = Blueprint("user", __name__)

user_bp.route("/", methods=["GET"])(user_controller.status)
user_bp.route("/check-user", methods=["GET"])(user_controller.check_user)
user_bp.route("/user", methods=["GET"])(user_controller.get_user)
user_bp.route("/register", methods=["POST"])(user_controller.register)
