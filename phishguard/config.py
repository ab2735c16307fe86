# config.py
"""
Runtime settings for PhishGuard, read once from the environment.
"""

import os

VERSION = "1.0"

PORT = int(os.getenv("PORT", "5001"))

# Network fetch limits
REQUEST_TIMEOUT = float(os.getenv("PHISHGUARD_REQUEST_TIMEOUT", "5"))  # seconds
MAX_REDIRECTS = int(os.getenv("PHISHGUARD_MAX_REDIRECTS", "5"))
# standalone content fetches use the requests default hop limit
CONTENT_MAX_REDIRECTS = int(os.getenv("PHISHGUARD_CONTENT_MAX_REDIRECTS", "30"))
MAX_BYTES = int(os.getenv("PHISHGUARD_MAX_BYTES", str(2 * 1024 * 1024)))
USER_AGENT = os.getenv("PHISHGUARD_USER_AGENT", f"PhishGuard/{VERSION}")

# One GET per evaluation feeding both the redirect and the content checks.
# Set to 0 to issue the two fetches separately (in parallel).
SHARED_FETCH = os.getenv("PHISHGUARD_SHARED_FETCH", "1").lower() not in ("0", "false", "no")

# API
RATE_LIMIT = os.getenv("PHISHGUARD_RATE_LIMIT", "30 per minute")
DEFAULT_LIMITS = [os.getenv("PHISHGUARD_DEFAULT_LIMIT", "60 per minute")]
REDIS_URL = os.getenv("REDIS_URL")
API_KEY = os.getenv("PHISHGUARD_API_KEY", None)

LOG_LEVEL = os.getenv("PHISHGUARD_LOG_LEVEL", "INFO").upper()
