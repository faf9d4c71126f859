import os
import sys

from sugartrack import create_app
from sugartrack.errors import SetupError

try:
    app = create_app()
except SetupError as e:
    print(f"❌ Startup failed: {e.message}")
    sys.exit(1)

if __name__ == "__main__":
    # the reloader would start a second reminder scheduler
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 3000)), use_reloader=False)
