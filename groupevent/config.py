# groupevent/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Remote backend
API_BASE_URL = os.getenv("GROUPEVENT_API_BASE_URL", "https://group-event-zeta.vercel.app/api").rstrip("/")

_timeout_raw = os.getenv("GROUPEVENT_API_TIMEOUT", "10")
try:
    API_TIMEOUT = float(_timeout_raw)
except ValueError:
    raise EnvironmentError(
        f"GROUPEVENT_API_TIMEOUT must be a number of seconds, got '{_timeout_raw}'.\n"
        "Please fix it in .env file or with: export GROUPEVENT_API_TIMEOUT=10"
    )

# Local key-value storage (saved events, device id)
STORAGE_PATH = os.path.expanduser(os.getenv("GROUPEVENT_STORAGE_PATH", "~/.groupevent-storage.json"))
