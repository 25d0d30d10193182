"""Configuration for the active window details service."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env
_env_file = Path(__file__).parent / ".env"
load_dotenv(_env_file)

# Server (HTTP + WebSocket export of the operation surface)
SERVER_HOST = os.environ.get("SERVER_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("SERVER_PORT", "8790"))
SERVER_URL = os.environ.get("SERVER_URL", "").strip() or f"http://{SERVER_HOST}:{SERVER_PORT}"
# WebSocket URL derived from SERVER_URL unless set explicitly
WS_URL = os.environ.get("WS_URL", "").strip() or (
    SERVER_URL.replace("https://", "wss://").replace("http://", "ws://").rstrip("/") + "/ws"
)

# Names kept from the GNOME Shell D-Bus interface so existing callers recognise them
DBUS_INTERFACE = os.environ.get("DBUS_INTERFACE", "org.gnome.Shell.Extensions.ActiveWindowDetails")
OBJECT_PATH = os.environ.get("OBJECT_PATH", "/org/gnome/Shell/Extensions/ActiveWindowDetails")

# Process records (psutil PROCFS_PATH) - override for containers that mount the host procfs elsewhere
PROC_ROOT = Path(os.environ.get("PROC_ROOT", "/proc"))

# Max seconds for a single xprop / xwininfo call
XPROP_TIMEOUT = float(os.environ.get("XPROP_TIMEOUT", "1.0"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Identity reported by getVersion and getAllWindowData
EXTENSION_NAME = os.environ.get("EXTENSION_NAME", "Active Window Details")
EXTENSION_UUID = os.environ.get("EXTENSION_UUID", "active-window-details@imaginationguild.com")
EXTENSION_VERSION = os.environ.get("EXTENSION_VERSION", "1.0.0")
EXTENSION_DESCRIPTION = os.environ.get(
    "EXTENSION_DESCRIPTION",
    "Window and process details of the focused window, with application-specific context",
)
EXTENSION_URL = os.environ.get("EXTENSION_URL", "")
DATA_COLLECTION_VERSION = "1.0"
