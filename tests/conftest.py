from datetime import datetime, timezone

import pytest

from sugartrack import create_app
from sugartrack.errors import SendFailure, StoreUnavailable

# 10:00 on 14 Sep 2025 in Bangkok
FIXED_NOW = datetime(2025, 9, 14, 3, 0, 0, tzinfo=timezone.utc)

HEADERS = {
    "Users": ["userId", "firstName", "lastName", "gender", "birthDay", "age"],
    "SugarRecords": ["userId", "sugar", "type", "period", "date"],
    "MedicationLogs": ["userId", "date", "timeOfDay", "mealRelation", "status", "logTime"],
    "DoctorAppointments": ["userId", "date", "time", "note"],
}


class FakeRowStore:
    def __init__(self):
        self.tables = {name: [list(header)] for name, header in HEADERS.items()}
        self.appended = []
        self.fetches = []
        self.unavailable = False

    def add(self, table, *rows):
        for row in rows:
            self.tables[table].append([str(cell) for cell in row])

    def data(self, table):
        return self.tables[table][1:]

    def fetch_rows(self, table, column_range):
        self.fetches.append(table)
        if self.unavailable:
            raise StoreUnavailable()
        return [list(row) for row in self.tables[table]]

    def append_row(self, table, column_range, row, value_input_option="RAW"):
        if self.unavailable:
            raise StoreUnavailable()
        self.appended.append((table, list(row), value_input_option))
        self.tables[table].append([str(cell) for cell in row])
        return True


class FakeMessenger:
    def __init__(self, failing=()):
        self.pushed = []
        self.failing = set(failing)

    def push(self, recipient_id, message):
        if recipient_id in self.failing:
            raise SendFailure(recipient_id, "push rejected")
        self.pushed.append((recipient_id, message))
        return True


@pytest.fixture
def store():
    return FakeRowStore()


@pytest.fixture
def messenger():
    return FakeMessenger()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def app(store, messenger, sleeps):
    app = create_app(
        config={
            "TESTING": True,
            "SCHEDULER_ENABLED": False,
            "CLOCK": lambda: FIXED_NOW,
            "SLEEP": sleeps.append,
            "SPREADSHEET_ID": "sheet-123",
        },
        store=store,
        messenger=messenger,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered(store):
    store.add("Users", ["U1", "Somchai", "Jaidee", "male", "1980-01-01", "45"])
    return "U1"
