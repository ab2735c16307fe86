
"""Main Flask API for PhishGuard.

Run: python -m phishguard.api
"""

import logging
from flask import Flask, request, jsonify, abort
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import redis as redis_lib

from . import config
from .app.scanner import evaluate, InputError

# Logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("api")

# Flask app
app = Flask(__name__)
CORS(app)

# Rate limiter: prefer Redis storage in production when REDIS_URL is set
if config.REDIS_URL:
    try:
        redis_lib.from_url(config.REDIS_URL).ping()
        limiter = Limiter(get_remote_address, app=app,
                          default_limits=config.DEFAULT_LIMITS, storage_uri=config.REDIS_URL)
        logger.info("Using Redis at %s for rate limiting", config.REDIS_URL)
    except redis_lib.RedisError:
        logger.exception("Failed to connect to Redis, falling back to in-memory limiter")
        limiter = Limiter(get_remote_address, app=app, default_limits=config.DEFAULT_LIMITS)
else:
    limiter = Limiter(get_remote_address, app=app, default_limits=config.DEFAULT_LIMITS)

if config.API_KEY:
    logger.info("API key enabled")


def require_api_key() -> None:
    if not config.API_KEY:
        return
    key = request.headers.get("X-API-Key") or request.args.get("api_key")
    if not key or key != config.API_KEY:
        abort(401, description="Invalid or missing API key")


@app.route("/", methods=["GET"])
def index():
    return "PhishGuard Backend is Running!"


@app.route("/health", methods=["GET"])
@limiter.exempt
def health():
    return jsonify({"status": "ok", "version": config.VERSION})


@app.route("/check-url", methods=["POST"])
@limiter.limit(config.RATE_LIMIT)
def check_url():
    require_api_key()
    data = request.get_json(silent=True)
    url = data.get("url") if isinstance(data, dict) else None

    try:
        report = evaluate(url)
    except InputError as e:
        logger.info("Rejected request: %s", e)
        return jsonify({"error": str(e)}), 400
    except Exception:
        logger.exception("Error checking URL: %s", url)
        return jsonify({"error": "Internal Server Error"}), 500

    return jsonify(report.to_dict()), 200


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT, debug=False)
