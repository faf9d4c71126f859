# sugartrack/services/line_service.py
import logging

import requests

from sugartrack.errors import SendFailure

logger = logging.getLogger(__name__)

LINE_PUSH_URL = "https://api.line.me/v2/bot/message/push"


class LineMessenger:
    """Push-message sender for the LINE Messaging API."""

    def __init__(self, channel_access_token, session=None, timeout=10):
        self.channel_access_token = channel_access_token
        self.session = session or requests.Session()
        self.timeout = timeout

    def push(self, recipient_id, message):
        if not self.channel_access_token:
            raise SendFailure(recipient_id, "LINE_CHANNEL_ACCESS_TOKEN is not configured")

        headers = {
            "Authorization": f"Bearer {self.channel_access_token}",
            "Content-Type": "application/json",
        }
        payload = {"to": recipient_id, "messages": [message]}

        try:
            response = self.session.post(LINE_PUSH_URL, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise SendFailure(recipient_id, f"LINE push failed: {e}") from e

        if response.status_code != 200:
            raise SendFailure(
                recipient_id,
                f"LINE push rejected ({response.status_code}): {response.text}",
            )
        return True


def text_message(text):
    return {"type": "text", "text": text}
