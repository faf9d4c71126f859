# sugartrack/utils/guards.py
from sugartrack.errors import DuplicateRecord, NotRegistered
from sugartrack.models import USERS


def data_rows(rows):
    """Drop the header row every table starts with."""
    return rows[1:] if rows else []


def _cell(row, index):
    return str(row[index]) if index < len(row) else ""


def is_registered(rows, user_id):
    user_id = str(user_id)
    return any(row and _cell(row, 0) == user_id for row in data_rows(rows))


def ensure_registered(store, user_id):
    rows = store.fetch_rows(USERS.name, USERS.columns)
    if not is_registered(rows, user_id):
        raise NotRegistered(user_id)
    return rows


def find_duplicate(rows, key_columns, candidate):
    """Return the first data row whose key columns equal the candidate values.

    key_columns maps a column index to the key name used in candidate.
    """
    expected = {index: str(candidate[name]) for index, name in key_columns.items()}
    for row in data_rows(rows):
        if all(_cell(row, index) == value for index, value in expected.items()):
            return row
    return None


def ensure_unique(rows, kind, key_columns, candidate):
    if find_duplicate(rows, key_columns, candidate) is not None:
        key = {name: candidate[name] for name in key_columns.values()}
        raise DuplicateRecord(kind, key)
