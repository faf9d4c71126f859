# sugartrack/errors.py
"""
Error kinds raised by the services and turned into JSON responses
by the handler registered in create_app().
"""


class SugarTrackError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {"success": False, "message": self.message}


class SetupError(SugarTrackError):
    default_message = "Service setup failed"


class ValidationError(SugarTrackError):
    status_code = 400
    default_message = "Incomplete or invalid data"

    def __init__(self, fields=None, message=None):
        self.fields = list(fields or [])
        if message is None and self.fields:
            message = f"Missing or invalid fields: {self.fields}"
        super().__init__(message)

    def to_dict(self):
        payload = super().to_dict()
        if self.fields:
            payload["fields"] = self.fields
        return payload


class NotRegistered(SugarTrackError):
    status_code = 404
    default_message = "Please register first from the registration menu"

    def __init__(self, user_id=None, message=None):
        super().__init__(message)
        self.user_id = user_id

    def to_dict(self):
        payload = super().to_dict()
        payload["notRegistered"] = True
        return payload


class DuplicateRecord(SugarTrackError):
    status_code = 409

    def __init__(self, kind, key, message=None):
        self.kind = kind
        self.key = dict(key)
        if message is None:
            described = ", ".join(f"{k}={v}" for k, v in self.key.items())
            message = f"This {kind} has already been recorded ({described})"
        super().__init__(message)

    def to_dict(self):
        payload = super().to_dict()
        payload["isDuplicate"] = True
        return payload


class StoreUnavailable(SugarTrackError):
    status_code = 503
    default_message = "Cannot reach the data store, please try again"


class SendFailure(SugarTrackError):
    status_code = 502
    default_message = "Failed to send message"

    def __init__(self, recipient_id=None, message=None):
        super().__init__(message)
        self.recipient_id = recipient_id
