from flask import current_app, jsonify, request

from sugartrack.errors import DuplicateRecord, NotRegistered, StoreUnavailable, ValidationError
from sugartrack.helpers import get_store, local_now
from sugartrack.models import USERS, UserProfile
from sugartrack.utils.guards import data_rows, ensure_unique, is_registered
from sugartrack.utils.normalizer import compute_age, normalize_registration


def status():
    return jsonify({
        "message": "Sugar Track API is running!",
        "spreadsheet": current_app.config.get("SPREADSHEET_ID"),
    }), 200


def check_user():
    user_id = (request.args.get("userId") or "").strip()
    if not user_id:
        raise ValidationError(["userId"], "userId is required")

    try:
        rows = get_store().fetch_rows(USERS.name, USERS.columns)
    except StoreUnavailable as e:
        return jsonify({"success": False, "registered": False, "message": e.message}), e.status_code

    return jsonify({"registered": is_registered(rows, user_id)}), 200


def get_user():
    user_id = (request.args.get("userId") or "").strip()
    if not user_id:
        raise ValidationError(["userId"], "userId is required")

    rows = get_store().fetch_rows(USERS.name, USERS.columns)
    user_row = next((row for row in data_rows(rows) if row and row[0] == user_id), None)
    if user_row is None:
        return jsonify(NotRegistered(user_id, "User is not registered yet").to_dict()), 200

    return jsonify({
        "success": True,
        "user": UserProfile.from_row(user_row).to_dict(),
    }), 200


def register():
    data = request.get_json(silent=True) or {}
    profile = normalize_registration(data)

    store = get_store()
    rows = store.fetch_rows(USERS.name, USERS.columns)
    try:
        ensure_unique(rows, "user", {0: "user_id"}, profile)
    except DuplicateRecord as e:
        e.message = "You are already registered, you can record sugar values right away"
        raise

    today = local_now().date()
    user = UserProfile(
        user_id=profile["user_id"],
        first_name=profile["first_name"],
        last_name=profile["last_name"],
        gender=profile["gender"],
        birth_day=profile["birth_day"],
        age=compute_age(profile["birth_date"], today),
    )
    store.append_row(USERS.name, USERS.columns, user.to_row(), value_input_option="RAW")
    current_app.logger.info("Registered user %s", user.user_id)

    return jsonify({"success": True, "message": "Registration complete"}), 201
