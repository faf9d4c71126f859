from flask import current_app, jsonify, request

from sugartrack.errors import StoreUnavailable
from sugartrack.helpers import get_store, local_now
from sugartrack.models import MEDICATION_LOGS, MedicationLog
from sugartrack.utils.guards import ensure_registered
from sugartrack.utils.normalizer import normalize_medication_log
from sugartrack.utils.pagination import (
    chronological_key, load_user_records, paginate, parse_page_arg, sort_newest_first,
)


def save_medication_log():
    data = request.get_json(silent=True) or {}
    entry = normalize_medication_log(data)

    store = get_store()
    ensure_registered(store, entry["user_id"])

    now = local_now()
    log = MedicationLog(
        user_id=entry["user_id"],
        date=now.date().isoformat(),
        time_of_day=entry["time_of_day"],
        meal_relation=entry["meal_relation"],
        status=entry["status"],
        log_time=now.strftime("%H:%M:%S"),
    )
    store.append_row(MEDICATION_LOGS.name, MEDICATION_LOGS.columns, log.to_row(), value_input_option="RAW")
    current_app.logger.info("Saved medication log for user %s at %s %s", log.user_id, log.date, log.log_time)

    return jsonify({"success": True, "message": "Medication log saved"}), 201


def get_medication_records():
    user_id = (request.args.get("userId") or "").strip()
    page = parse_page_arg(request.args.get("page"), 1)
    limit = parse_page_arg(request.args.get("limit"), current_app.config["PAGE_SIZE"])

    if not user_id:
        return jsonify({"success": False, "message": "userId is required", "records": [], "pagination": None}), 400

    try:
        records = load_user_records(get_store(), MEDICATION_LOGS, MedicationLog, user_id)
    except StoreUnavailable as e:
        return jsonify({"success": False, "message": e.message, "records": [], "pagination": None}), e.status_code

    records = sort_newest_first(records, key=lambda r: chronological_key(r.date, r.log_time))
    # this listing keeps the requested page inside the available range
    items, pagination = paginate(records, page, limit, clamp=True)

    return jsonify({
        "success": True,
        "records": [r.to_dict() for r in items],
        "pagination": pagination.to_dict(with_links=False),
    }), 200
