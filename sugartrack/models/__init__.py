# sugartrack/models/__init__.py
from .records import (
    Table, USERS, SUGAR_RECORDS, MEDICATION_LOGS, APPOINTMENTS,
    UserProfile, SugarReading, MedicationLog, Appointment,
)
