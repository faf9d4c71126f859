import os

from dotenv import load_dotenv

from sugartrack.errors import SetupError, StoreUnavailable
from sugartrack.models import USERS
from sugartrack.services.sheets_service import init_sheets

load_dotenv()

try:
    store = init_sheets(os.getenv("SPREADSHEET_ID"), os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON"))
    header = store.fetch_rows(USERS.name, "A1:F1")
    print("✅ Connection successful!", header[0] if header else "(Users sheet is empty)")
except (SetupError, StoreUnavailable) as e:
    print(f"❌ Connection failed: {e.message}")
