# sugartrack/services/reminder_service.py
import atexit
import logging
import time
from datetime import timedelta

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from sugartrack.errors import SendFailure, StoreUnavailable
from sugartrack.helpers import local_now, utc_now
from sugartrack.models import APPOINTMENTS, Appointment
from sugartrack.services.line_service import text_message
from sugartrack.utils.guards import data_rows

logger = logging.getLogger(__name__)

JOB_ID = "daily_appointment_reminder"
DEFAULT_NOTE = "None"

TEST_APPOINTMENT = Appointment(user_id="", date="2025-09-15", time="14:30", note="System test appointment")


def build_reminder_text(appointment):
    return (
        "🏥 Appointment reminder\n\n"
        f"📅 Date: {appointment.date}\n"
        f"⏰ Time: {appointment.time}\n"
        f"📝 Note: {appointment.note or DEFAULT_NOTE}\n\n"
        "💡 Please get ready and arrive on time."
    )


class ReminderService:
    """
    Finds appointments due tomorrow and pushes one reminder per appointment.
    Sends go out one at a time with a pause in between so the chat API
    never sees a burst.
    """

    def __init__(self, store, messenger, utc_offset_hours=7, pause_seconds=1.0, clock=None, sleep=None):
        self.store = store
        self.messenger = messenger
        self.utc_offset_hours = utc_offset_hours
        self.pause_seconds = pause_seconds
        self.clock = clock or utc_now
        self.sleep = sleep or time.sleep

    def tomorrow(self):
        today = local_now(self.utc_offset_hours, self.clock()).date()
        return (today + timedelta(days=1)).isoformat()

    def appointments_due(self, day):
        rows = self.store.fetch_rows(APPOINTMENTS.name, APPOINTMENTS.columns)
        return [
            Appointment.from_row(row)
            for row in data_rows(rows)
            if len(row) > 1 and row[1] == day
        ]

    def send_reminder(self, recipient_id, appointment):
        try:
            self.messenger.push(recipient_id, text_message(build_reminder_text(appointment)))
        except SendFailure as e:
            logger.error("Failed to send reminder to %s: %s", recipient_id, e)
            return False
        except Exception as e:
            logger.exception("Unexpected error sending reminder to %s: %s", recipient_id, e)
            return False
        logger.info("Reminder sent to user: %s", recipient_id)
        return True

    def send_daily_reminders(self):
        """Run one reminder pass; never raises."""
        day = self.tomorrow()
        summary = {"date": day, "matched": 0, "sent": 0, "failed": 0}
        logger.info("Starting daily reminder process for %s", day)

        try:
            appointments = self.appointments_due(day)
        except StoreUnavailable as e:
            logger.error("Error fetching appointments to remind: %s", e)
            summary["error"] = e.message
            return summary
        except Exception as e:
            logger.exception("Error in daily reminder process: %s", e)
            summary["error"] = str(e)
            return summary

        summary["matched"] = len(appointments)
        if not appointments:
            logger.info("No appointments to remind for %s", day)
            return summary

        for index, appointment in enumerate(appointments):
            if index:
                self.sleep(self.pause_seconds)
            if self.send_reminder(appointment.user_id, appointment):
                summary["sent"] += 1
            else:
                summary["failed"] += 1

        logger.info(
            "Daily reminders completed: %s sent, %s failed", summary["sent"], summary["failed"]
        )
        return summary

    def send_test_reminder(self, recipient_id):
        return self.send_reminder(recipient_id, TEST_APPOINTMENT)


def start_scheduler(service, hour=6, minute=0, timezone="Asia/Bangkok"):
    scheduler = BackgroundScheduler(timezone=timezone)
    scheduler.add_job(
        service.send_daily_reminders,
        CronTrigger(hour=hour, minute=minute, timezone=timezone),
        id=JOB_ID,
        replace_existing=True,
    )
    scheduler.start()
    atexit.register(lambda: scheduler.shutdown(wait=False) if scheduler.running else None)
    logger.info("Daily reminder job scheduled at %02d:%02d %s", hour, minute, timezone)
    return scheduler
