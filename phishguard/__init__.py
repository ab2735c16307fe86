"""PhishGuard: heuristic phishing checks for a single URL."""

from .config import VERSION as __version__
