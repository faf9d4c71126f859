# sugartrack/__init__.py
from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv
import logging
import os

from .errors import SugarTrackError

load_dotenv()


def _env_int(name, default):
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name, default):
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def create_app(config=None, store=None, messenger=None):
    """Build the Flask app.

    store and messenger may be passed in (tests do); otherwise they are
    built from the environment. A failed Google Sheets setup raises
    SetupError out of here so the caller decides how to stop.
    """
    app = Flask(__name__)

    app.config['SPREADSHEET_ID'] = os.getenv('SPREADSHEET_ID')
    app.config['GOOGLE_SERVICE_ACCOUNT_JSON'] = os.getenv('GOOGLE_SERVICE_ACCOUNT_JSON')
    app.config['LINE_CHANNEL_ACCESS_TOKEN'] = os.getenv('LINE_CHANNEL_ACCESS_TOKEN')
    app.config['LINE_CHANNEL_SECRET'] = os.getenv('LINE_CHANNEL_SECRET')
    app.config['UTC_OFFSET_HOURS'] = _env_int('UTC_OFFSET_HOURS', 7)
    app.config['PAGE_SIZE'] = _env_int('PAGE_SIZE', 12)
    app.config['REMINDER_HOUR'] = _env_int('REMINDER_HOUR', 6)
    app.config['REMINDER_MINUTE'] = _env_int('REMINDER_MINUTE', 0)
    app.config['REMINDER_TIMEZONE'] = os.getenv('REMINDER_TIMEZONE', 'Asia/Bangkok')
    app.config['REMINDER_PAUSE_SECONDS'] = _env_float('REMINDER_PAUSE_SECONDS', 1.0)
    app.config['SCHEDULER_ENABLED'] = os.getenv('SCHEDULER_ENABLED', 'true').lower() == 'true'
    app.config['CLOCK'] = None
    app.config['SLEEP'] = None

    if config:
        app.config.update(config)

    app.logger.setLevel(logging.INFO)

    CORS(app)

    from .services.sheets_service import init_sheets
    from .services.line_service import LineMessenger
    from .services.reminder_service import ReminderService, start_scheduler

    if store is None:
        store = init_sheets(app.config['SPREADSHEET_ID'], app.config['GOOGLE_SERVICE_ACCOUNT_JSON'])
    if messenger is None:
        messenger = LineMessenger(app.config['LINE_CHANNEL_ACCESS_TOKEN'])

    app.config['ROW_STORE'] = store
    app.config['MESSENGER'] = messenger
    app.config['REMINDER_SERVICE'] = ReminderService(
        store,
        messenger,
        utc_offset_hours=app.config['UTC_OFFSET_HOURS'],
        pause_seconds=app.config['REMINDER_PAUSE_SECONDS'],
        clock=app.config['CLOCK'],
        sleep=app.config['SLEEP'],
    )

    @app.errorhandler(SugarTrackError)
    def handle_sugartrack_error(e):
        app.logger.warning("%s: %s", type(e).__name__, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_error(e):
        from werkzeug.exceptions import HTTPException
        if isinstance(e, HTTPException):
            return jsonify(success=False, message=e.description), e.code
        app.logger.exception("Unhandled error: %s", e)
        return jsonify(success=False, message="Internal server error"), 500

    from .routes.user_routes import user_bp
    from .routes.sugar_routes import sugar_bp
    from .routes.medication_routes import medication_bp
    from .routes.appointment_routes import appointment_bp
    from .routes.reminder_routes import reminder_bp

    app.register_blueprint(user_bp)
    app.register_blueprint(sugar_bp)
    app.register_blueprint(medication_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(reminder_bp)

    if app.config['SCHEDULER_ENABLED'] and not app.testing:
        app.extensions['reminder_scheduler'] = start_scheduler(
            app.config['REMINDER_SERVICE'],
            hour=app.config['REMINDER_HOUR'],
            minute=app.config['REMINDER_MINUTE'],
            timezone=app.config['REMINDER_TIMEZONE'],
        )

    return app
