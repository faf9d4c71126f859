from flask import current_app, jsonify, redirect, request, url_for

from sugartrack.errors import DuplicateRecord, StoreUnavailable, ValidationError
from sugartrack.helpers import get_store
from sugartrack.models import APPOINTMENTS, Appointment
from sugartrack.utils.guards import ensure_unique
from sugartrack.utils.normalizer import normalize_appointment
from sugartrack.utils.pagination import (
    chronological_key, load_user_records, paginate, parse_page_arg, sort_newest_first,
)

APPOINTMENT_NATURAL_KEY = {0: "user_id", 1: "date", 2: "time"}


def _newest_first(appointments):
    return sort_newest_first(appointments, key=lambda a: chronological_key(a.date, a.time))


def save_appointment():
    data = request.get_json(silent=True) or {}
    try:
        entry = normalize_appointment(data)
    except ValidationError as e:
        e.message = "Please enter the appointment date and time"
        raise

    store = get_store()
    rows = store.fetch_rows(APPOINTMENTS.name, APPOINTMENTS.columns)
    try:
        ensure_unique(rows, "appointment", APPOINTMENT_NATURAL_KEY, entry)
    except DuplicateRecord as e:
        e.message = "This appointment has already been recorded"
        raise

    appointment = Appointment(**entry)
    store.append_row(APPOINTMENTS.name, APPOINTMENTS.columns, appointment.to_row(), value_input_option="RAW")
    current_app.logger.info("Saved appointment for user %s on %s %s", appointment.user_id, appointment.date, appointment.time)

    return jsonify({"success": True, "message": "Appointment saved"}), 201


def get_appointment_records():
    user_id = (request.args.get("userId") or "").strip()
    page = parse_page_arg(request.args.get("page"), 1)
    limit = parse_page_arg(request.args.get("limit"), current_app.config["PAGE_SIZE"])
    current_app.logger.info("Getting appointment records for user: %s, page: %s, limit: %s", user_id, page, limit)

    if not user_id:
        return jsonify({"success": False, "message": "userId is required", "appointments": [], "pagination": None}), 400

    try:
        appointments = load_user_records(get_store(), APPOINTMENTS, Appointment, user_id)
    except StoreUnavailable as e:
        return jsonify({"success": False, "message": e.message, "appointments": [], "pagination": None}), e.status_code

    items, pagination = paginate(_newest_first(appointments), page, limit)
    current_app.logger.info(
        "Page %s/%s, showing %s appointments", pagination.current_page, pagination.total_pages, len(items)
    )

    return jsonify({
        "success": True,
        "appointments": [a.to_dict() for a in items],
        "pagination": pagination.to_dict(),
    }), 200


def get_appointments():
    """Unpaginated listing kept for older clients; hands off to the paged one when asked for a page."""
    user_id = (request.args.get("userId") or "").strip()
    page = request.args.get("page")
    limit = request.args.get("limit")

    if not user_id:
        return jsonify({"success": False, "message": "userId required", "appointments": []}), 400

    if page:
        return redirect(url_for(
            "appointment.get_appointment_records",
            userId=user_id, page=page, limit=limit or current_app.config["PAGE_SIZE"],
        ))

    try:
        appointments = load_user_records(get_store(), APPOINTMENTS, Appointment, user_id)
    except StoreUnavailable as e:
        return jsonify({"success": False, "message": e.message, "appointments": []}), e.status_code

    appointments = _newest_first(appointments)
    return jsonify({
        "success": True,
        "totalRecords": len(appointments),
        "appointments": [a.to_dict() for a in appointments],
    }), 200
