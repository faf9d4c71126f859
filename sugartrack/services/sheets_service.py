# sugartrack/services/sheets_service.py
import json
import logging

import gspread
import requests

from sugartrack.errors import SetupError, StoreUnavailable

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsRowStore:
    """
    Row store backed by one Google Sheets spreadsheet.
    Tables are sheet tabs, addressed as "<Sheet>!<columns>" (e.g. "Users!A:F").
    Every call is a fresh round trip; nothing is cached between requests.
    """

    def __init__(self, spreadsheet):
        self.spreadsheet = spreadsheet

    @property
    def spreadsheet_id(self):
        return self.spreadsheet.id

    def fetch_rows(self, table, column_range):
        address = f"{table}!{column_range}"
        try:
            response = self.spreadsheet.values_get(address)
        except (gspread.exceptions.GSpreadException, requests.exceptions.RequestException) as e:
            logger.exception("Fetching %s failed: %s", address, e)
            raise StoreUnavailable() from e
        return [[str(cell) for cell in row] for row in response.get("values", [])]

    def append_row(self, table, column_range, row, value_input_option="RAW"):
        address = f"{table}!{column_range}"
        try:
            self.spreadsheet.values_append(
                address,
                params={"valueInputOption": value_input_option},
                body={"values": [list(row)]},
            )
        except (gspread.exceptions.GSpreadException, requests.exceptions.RequestException) as e:
            logger.exception("Appending to %s failed: %s", address, e)
            raise StoreUnavailable() from e
        return True


def _load_service_account(raw):
    try:
        info = json.loads(raw) if isinstance(raw, str) else dict(raw)
    except (TypeError, ValueError) as e:
        raise SetupError(f"Failed to parse GOOGLE_SERVICE_ACCOUNT_JSON: {e}") from e

    # keys pasted into env vars usually carry literal "\n"
    if info.get("private_key"):
        info["private_key"] = info["private_key"].replace("\\n", "\n")
    return info


def init_sheets(spreadsheet_id, service_account_json):
    """Authorize with a service account and open the spreadsheet.

    Raises SetupError instead of exiting so the caller decides what a
    failed startup means.
    """
    if not spreadsheet_id:
        raise SetupError("SPREADSHEET_ID is not set")
    if not service_account_json:
        raise SetupError("GOOGLE_SERVICE_ACCOUNT_JSON is not set")

    info = _load_service_account(service_account_json)
    try:
        client = gspread.service_account_from_dict(info, scopes=SCOPES)
        spreadsheet = client.open_by_key(spreadsheet_id)
    except (ValueError, KeyError, gspread.exceptions.GSpreadException,
            requests.exceptions.RequestException) as e:
        raise SetupError(f"Google Sheets initialization error: {e}") from e

    logger.info("Google Sheets API initialized for spreadsheet %s", spreadsheet_id)
    return SheetsRowStore(spreadsheet)
