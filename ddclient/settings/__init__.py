"""Client settings."""

from pathlib import Path

VERSION = "0.1.0"

# Logging
LOG_DIR = Path("logs")

# API
API_BASE_URL = "https://api.directdecisions.com"
API_TIMEOUT = 60
USER_AGENT = f"ddclient-py/{VERSION}"
CONTENT_TYPE = "application/json; charset=utf-8"
