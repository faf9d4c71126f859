from flask import current_app, jsonify, request

from sugartrack.errors import DuplicateRecord, StoreUnavailable
from sugartrack.helpers import get_store, local_now
from sugartrack.models import SUGAR_RECORDS, SugarReading
from sugartrack.utils.guards import ensure_registered, ensure_unique
from sugartrack.utils.normalizer import normalize_sugar_reading
from sugartrack.utils.pagination import (
    chronological_key, load_user_records, paginate, parse_page_arg,
    rows_for_user, sort_newest_first, weekly_chart,
)

SUGAR_NATURAL_KEY = {0: "user_id", 2: "meal_timing", 3: "period", 4: "date"}


def _day_month_year(day):
    return f"{day.day}/{day.month}/{day.year}"


def save_sugar():
    data = request.get_json(silent=True) or {}
    reading = normalize_sugar_reading(data)

    store = get_store()
    # 1) registration gate
    ensure_registered(store, reading["user_id"])

    # 2) one value per meal timing, period and day
    reading["date"] = _day_month_year(local_now().date())
    rows = store.fetch_rows(SUGAR_RECORDS.name, SUGAR_RECORDS.columns)
    try:
        ensure_unique(rows, "sugar reading", SUGAR_NATURAL_KEY, reading)
    except DuplicateRecord as e:
        e.message = (
            f'Sugar value "{reading["meal_timing"]} {reading["period"]}" was already '
            f'recorded on {reading["date"]}, please choose another time slot'
        )
        raise

    # 3) append
    record = SugarReading(
        user_id=reading["user_id"],
        sugar=reading["sugar"],
        meal_timing=reading["meal_timing"],
        period=reading["period"],
        date=reading["date"],
    )
    store.append_row(SUGAR_RECORDS.name, SUGAR_RECORDS.columns, record.to_row(), value_input_option="RAW")
    current_app.logger.info("Saved sugar reading for user %s on %s", record.user_id, record.date)

    return jsonify({"success": True, "message": "Sugar value saved"}), 201


def get_sugar_records():
    user_id = (request.args.get("userId") or "").strip()
    page = parse_page_arg(request.args.get("page"), 1)
    limit = parse_page_arg(request.args.get("limit"), current_app.config["PAGE_SIZE"])
    current_app.logger.info("Getting sugar data for user: %s page: %s limit: %s", user_id, page, limit)

    if not user_id:
        return jsonify({"success": False, "message": "userId required", "records": [], "pagination": None}), 400

    try:
        records = load_user_records(get_store(), SUGAR_RECORDS, SugarReading, user_id)
    except StoreUnavailable as e:
        return jsonify({"success": False, "message": e.message, "records": [], "pagination": None}), e.status_code

    records = sort_newest_first(records, key=lambda r: chronological_key(r.date))
    items, pagination = paginate(records, page, limit)
    current_app.logger.info(
        "Page %s/%s, showing %s records", pagination.current_page, pagination.total_pages, len(items)
    )

    return jsonify({
        "success": True,
        "records": [r.to_dict() for r in items],
        "pagination": pagination.to_dict(),
    }), 200


def get_sugar_chart(range_type):
    user_id = (request.args.get("userId") or "").strip()
    empty = {"labels": [], "beforeMeal": [], "afterMeal": []}
    current_app.logger.info("Getting sugar data for user: %s, range: %s", user_id, range_type)

    if not user_id:
        return jsonify({"success": False, "message": "userId required", **empty}), 400

    try:
        rows = get_store().fetch_rows(SUGAR_RECORDS.name, SUGAR_RECORDS.columns)
    except StoreUnavailable as e:
        return jsonify({"success": False, "message": e.message, **empty}), e.status_code

    user_rows = rows_for_user(rows, user_id)
    chart = weekly_chart(user_rows) if range_type == "weekly" else empty

    return jsonify({"success": True, **chart, "totalRecords": len(user_rows)}), 200
