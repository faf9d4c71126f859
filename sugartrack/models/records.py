"""
Record shapes stored in the spreadsheet tabs.

Each table has a fixed column layout; rows come back from the store as
lists of strings and may be shorter than the layout when trailing cells
are empty, so every optional column defaults to "".
"""

from collections import namedtuple
from dataclasses import dataclass

Table = namedtuple("Table", ["name", "columns"])

USERS = Table("Users", "A:F")
SUGAR_RECORDS = Table("SugarRecords", "A:E")
MEDICATION_LOGS = Table("MedicationLogs", "A:F")
APPOINTMENTS = Table("DoctorAppointments", "A:D")


def _cell(row, index):
    if index < len(row) and row[index] is not None:
        return str(row[index])
    return ""


@dataclass
class UserProfile:
    user_id: str
    first_name: str
    last_name: str
    gender: str
    birth_day: str
    age: str = ""

    @classmethod
    def from_row(cls, row):
        return cls(*(_cell(row, i) for i in range(6)))

    def to_row(self):
        return [self.user_id, self.first_name, self.last_name, self.gender, self.birth_day, self.age]

    def to_dict(self):
        return {
            "userId": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "gender": self.gender,
            "birthDay": self.birth_day,
            "age": self.age,
        }


@dataclass
class SugarReading:
    """One blood-sugar value; meal_timing/period hold display labels."""
    user_id: str
    sugar: str
    meal_timing: str
    period: str
    date: str

    @classmethod
    def from_row(cls, row):
        return cls(*(_cell(row, i) for i in range(5)))

    def to_row(self):
        return [self.user_id, self.sugar, self.meal_timing, self.period, self.date]

    def to_dict(self):
        return {
            "userId": self.user_id,
            "sugar": self.sugar,
            "type": self.meal_timing,
            "period": self.period,
            "date": self.date,
        }


@dataclass
class MedicationLog:
    user_id: str
    date: str
    time_of_day: str
    meal_relation: str
    status: str
    log_time: str = ""

    @classmethod
    def from_row(cls, row):
        return cls(*(_cell(row, i) for i in range(6)))

    def to_row(self):
        return [self.user_id, self.date, self.time_of_day, self.meal_relation, self.status, self.log_time]

    def to_dict(self):
        return {
            "date": self.date,
            "timeOfDay": self.time_of_day,
            "mealRelation": self.meal_relation,
            "status": self.status,
            "logTime": self.log_time,
        }


@dataclass
class Appointment:
    user_id: str
    date: str
    time: str
    note: str = ""

    @classmethod
    def from_row(cls, row):
        return cls(*(_cell(row, i) for i in range(4)))

    def to_row(self):
        return [self.user_id, self.date, self.time, self.note]

    def to_dict(self):
        return {
            "date": self.date,
            "time": self.time,
            "note": self.note,
        }
