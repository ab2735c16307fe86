"""
Quick local smoke test: run the full evaluation pipeline on a few sample URLs
(live network) and print one JSON line per URL with the report and timing.

Run: PYTHONPATH=. python3 tools/run_local_smoke.py [url ...]
"""
import json
import logging
import sys
import time

from phishguard import config
from phishguard.app.scanner import evaluate

SAMPLES = [
    "https://example.com",
    "https://wikipedia.org",
    "http://phishingsite.biz/login",
    "http://malicious.test/login",
    "https://github.com",
]


def main(urls):
    logging.basicConfig(level=logging.WARNING)
    print("shared fetch:", config.SHARED_FETCH, "timeout:", config.REQUEST_TIMEOUT,
          "max redirects:", config.MAX_REDIRECTS)
    for u in urls:
        started = time.monotonic()
        report = evaluate(u)
        elapsed = round(time.monotonic() - started, 3)
        print(json.dumps({"url": u, "seconds": elapsed, **report.to_dict()}))


if __name__ == '__main__':
    main(sys.argv[1:] or SAMPLES)
