# sugartrack/utils/normalizer.py
"""
Shapes loosely-typed request bodies into canonical records.

Clients send the same field under different names depending on the
screen that produced it, so each field is looked up through an alias
list where the first non-empty alias wins.
"""

import math
from datetime import date, datetime

from sugartrack.errors import ValidationError

USER_ID_ALIASES = ("userId", "user_id")
SUGAR_VALUE_ALIASES = ("sugar", "value", "glucose")
MEAL_TIMING_ALIASES = ("type", "mealTiming", "meal_timing")
TIME_OF_DAY_ALIASES = ("period", "timeOfDay", "time_of_day")

MEAL_TIMING_LABELS = {"before": "ก่อนอาหาร", "after": "หลังอาหาร"}
TIME_OF_DAY_LABELS = {"morning": "เช้า", "evening": "เย็น"}


def first_present(data, aliases):
    for name in aliases:
        value = data.get(name)
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        return value
    return None


def to_label(code, labels):
    """Map an internal code to its display label; unknown values pass through."""
    return labels.get(code, code)


def from_label(label, labels):
    for code, text in labels.items():
        if text == label:
            return code
    return label


def parse_sugar_value(raw):
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return int(value) if value.is_integer() else value


def _require(data, fields):
    missing = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    if missing:
        raise ValidationError(missing)


def normalize_sugar_reading(data):
    data = data or {}
    user_id = first_present(data, USER_ID_ALIASES)
    sugar = parse_sugar_value(first_present(data, SUGAR_VALUE_ALIASES))
    meal_timing = first_present(data, MEAL_TIMING_ALIASES)
    period = first_present(data, TIME_OF_DAY_ALIASES)

    invalid = []
    if user_id is None:
        invalid.append("userId")
    if sugar is None:
        invalid.append("sugar")
    if meal_timing is None:
        invalid.append("type")
    if period is None:
        invalid.append("period")
    if invalid:
        raise ValidationError(invalid)

    return {
        "user_id": str(user_id),
        "sugar": sugar,
        "meal_timing": to_label(str(meal_timing), MEAL_TIMING_LABELS),
        "period": to_label(str(period), TIME_OF_DAY_LABELS),
    }


def normalize_registration(data):
    data = data or {}
    _require(data, ["userId", "firstName", "lastName", "gender", "birthDay"])
    birth_day = str(data["birthDay"]).strip()
    try:
        birth_date = datetime.strptime(birth_day, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(["birthDay"], "birthDay must be a date in YYYY-MM-DD format")

    return {
        "user_id": str(data["userId"]).strip(),
        "first_name": str(data["firstName"]).strip(),
        "last_name": str(data["lastName"]).strip(),
        "gender": str(data["gender"]).strip(),
        "birth_day": birth_day,
        "birth_date": birth_date,
    }


def normalize_medication_log(data):
    data = data or {}
    _require(data, ["userId", "timeOfDay", "mealRelation", "status"])
    return {
        "user_id": str(data["userId"]).strip(),
        "time_of_day": str(data["timeOfDay"]).strip(),
        "meal_relation": str(data["mealRelation"]).strip(),
        "status": str(data["status"]).strip(),
    }


def normalize_appointment(data):
    data = data or {}
    _require(data, ["userId", "date", "time"])
    return {
        "user_id": str(data["userId"]).strip(),
        "date": str(data["date"]).strip(),
        "time": str(data["time"]).strip(),
        "note": str(data.get("note") or "").strip(),
    }


def compute_age(birth_date, today=None):
    """Age in completed years: one less until this year's birthday arrives."""
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age
