# sugartrack/utils/pagination.py
"""
Listing helpers shared by the record endpoints: owner filtering,
newest-first ordering, page slicing and the weekly sugar chart.

Cells come back from the spreadsheet as text, so every date and time
is parsed defensively; a malformed cell never fails a listing, it just
sorts after every well-formed record.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time

from sugartrack.utils.guards import data_rows
from sugartrack.utils.normalizer import MEAL_TIMING_LABELS, TIME_OF_DAY_LABELS, parse_sugar_value

DEFAULT_PAGE_SIZE = 12
CHART_DAYS = 7

MIDNIGHT = time(0, 0, 0)


def parse_record_date(text):
    """Parse "d/m/YYYY" (padding optional) or ISO "YYYY-MM-DD"; None if neither."""
    if not text:
        return None
    text = str(text).strip()
    parts = text.split("/")
    try:
        if len(parts) == 3:
            day, month, year = (int(p) for p in parts)
            return date(year, month, day)
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_time_of_day(text):
    if not text:
        return MIDNIGHT
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(str(text).strip(), fmt).time()
        except ValueError:
            continue
    return MIDNIGHT


def chronological_key(date_text, time_text=None):
    parsed = parse_record_date(date_text)
    return (parsed is not None, parsed or date.min, parse_time_of_day(time_text))


def sort_newest_first(records, key):
    # sorted() stays stable with reverse=True, ties keep input order
    return sorted(records, key=key, reverse=True)


def rows_for_user(rows, user_id):
    user_id = str(user_id)
    return [row for row in data_rows(rows) if row and str(row[0]) == user_id]


def load_user_records(store, table, record_cls, user_id):
    rows = store.fetch_rows(table.name, table.columns)
    return [record_cls.from_row(row) for row in rows_for_user(rows, user_id)]


def parse_page_arg(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass
class Pagination:
    current_page: int
    total_pages: int
    total_records: int
    page_size: int

    @property
    def has_next(self):
        return self.current_page < self.total_pages

    @property
    def has_prev(self):
        return self.current_page > 1

    def to_dict(self, with_links=True):
        if not with_links:
            return {
                "currentPage": self.current_page,
                "totalPages": self.total_pages,
                "totalRecords": self.total_records,
                "limit": self.page_size,
                "hasPrev": self.has_prev,
                "hasNext": self.has_next,
            }
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalRecords": self.total_records,
            "recordsPerPage": self.page_size,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
            "nextPage": self.current_page + 1 if self.has_next else None,
            "prevPage": self.current_page - 1 if self.has_prev else None,
        }


def paginate(records, page=1, page_size=DEFAULT_PAGE_SIZE, clamp=False):
    """Slice one page out of records.

    With clamp=True the requested page is pulled into [1, total_pages]
    (and to 1 when there are no pages at all); otherwise it is used as given.
    """
    total_records = len(records)
    total_pages = math.ceil(total_records / page_size)
    if clamp:
        page = max(1, min(page, total_pages))
    start = (page - 1) * page_size
    items = records[start:start + page_size]
    return items, Pagination(page, total_pages, total_records, page_size)


def _chart_value(row):
    value = parse_sugar_value(row[1] if len(row) > 1 else None)
    return int(value) if value is not None else None


def weekly_chart(user_rows, days=CHART_DAYS):
    """Fixed-shape morning/evening series over the user's latest recorded dates.

    user_rows are SugarRecords rows already filtered to one user. Each kept
    date yields two slots; a slot is None when no reading matches it.
    """
    by_date = {}
    for row in user_rows:
        parsed = parse_record_date(row[4] if len(row) > 4 else None)
        if parsed is not None:
            by_date.setdefault(parsed, []).append(row)

    before_label = MEAL_TIMING_LABELS["before"]
    after_label = MEAL_TIMING_LABELS["after"]

    labels, before_meal, after_meal = [], [], []
    for day in sorted(by_date)[-days:]:
        short_date = f"{day.day}/{day.month}"
        for period in (TIME_OF_DAY_LABELS["morning"], TIME_OF_DAY_LABELS["evening"]):
            labels.append(f"{short_date}-{period}")
            before = _find_reading(by_date[day], before_label, period)
            after = _find_reading(by_date[day], after_label, period)
            before_meal.append(_chart_value(before) if before else None)
            after_meal.append(_chart_value(after) if after else None)

    return {"labels": labels, "beforeMeal": before_meal, "afterMeal": after_meal}


def _find_reading(rows, meal_timing, period):
    for row in rows:
        if len(row) > 3 and row[2] == meal_timing and row[3] == period:
            return row
    return None
