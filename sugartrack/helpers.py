# sugartrack/helpers.py
from datetime import datetime, timedelta, timezone

from flask import current_app


def api_response(success, message, data=None, status_code=200):
    return {
        "success": success,
        "message": message,
        "data": data
    }, status_code


def utc_now():
    return datetime.now(timezone.utc)


def local_now(offset_hours=None, now=None):
    """Current wall-clock time shifted to the configured UTC offset.

    Every recorded date/time pair is derived from this so that the
    date and the time of one write always agree.
    """
    if offset_hours is None:
        offset_hours = current_app.config.get("UTC_OFFSET_HOURS", 7)
    if now is None:
        clock = current_app.config.get("CLOCK") or utc_now
        now = clock()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone(timedelta(hours=offset_hours)))


def get_store():
    return current_app.config["ROW_STORE"]
