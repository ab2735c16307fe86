# html_scanner.py
"""
HTML scanner: fetch page HTML (safe defaults) and score it with a set of
independent phishing heuristics.

Primary functions:
    scan_content(url: str, fetch: FetchResult = None) -> ContentRiskResult
    score_html(url: str, html: str) -> ContentRiskResult
"""

from collections import namedtuple
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Sequence, Tuple
import logging

from bs4 import BeautifulSoup

from .fetcher import FetchResult, fetch_page
from . import config

logger = logging.getLogger("html_scanner")

PHISHING_THRESHOLD = 5  # strictly greater than this -> phishing
FAIL_CLOSED_SCORE = 10

# Tunable weights
WEIGHT_CROSS_DOMAIN_FORM = 3
WEIGHT_HIDDEN_INPUTS = 2
WEIGHT_OBFUSCATION = 3
WEIGHT_META_KEYWORD = 2

MAX_HIDDEN_INPUTS = 5
OBFUSCATION_MARKERS = ("eval(", "atob(", "document.write(")
META_KEYWORDS = ("password", "bank", "login", "secure", "verification")


@dataclass(frozen=True)
class ContentRiskResult:
    risk_score: int
    fetched: bool = True
    reasons: Tuple[str, ...] = ()

    @property
    def is_phishing(self) -> bool:
        return self.risk_score > PHISHING_THRESHOLD

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["reasons"] = list(self.reasons)
        d["is_phishing"] = self.is_phishing
        return d


# check(url, raw_html, soup) -> points (>= 0)
RiskRule = namedtuple("RiskRule", ["name", "check"])


def cross_domain_form(url: str, html: str, soup: BeautifulSoup) -> int:
    # Plain substring test, not a host comparison: an action on another path
    # of the same site still counts, and any action that merely contains
    # `url` passes.
    points = 0
    for form in soup.find_all("form"):
        action = form.get("action")
        if action and "http" in action and url not in action:
            points += WEIGHT_CROSS_DOMAIN_FORM
    return points


def excess_hidden_inputs(url: str, html: str, soup: BeautifulSoup) -> int:
    hidden = soup.select('input[type="hidden"]')
    return WEIGHT_HIDDEN_INPUTS if len(hidden) > MAX_HIDDEN_INPUTS else 0


def obfuscated_script(url: str, html: str, soup: BeautifulSoup) -> int:
    if any(marker in html for marker in OBFUSCATION_MARKERS):
        return WEIGHT_OBFUSCATION
    return 0


def phishing_meta_keywords(url: str, html: str, soup: BeautifulSoup) -> int:
    points = 0
    for meta in soup.find_all("meta"):
        content = meta.get("content")
        if content and any(k in content.lower() for k in META_KEYWORDS):
            points += WEIGHT_META_KEYWORD
    return points


DEFAULT_RULES: Tuple[RiskRule, ...] = (
    RiskRule("cross_domain_form", cross_domain_form),
    RiskRule("excess_hidden_inputs", excess_hidden_inputs),
    RiskRule("obfuscated_script", obfuscated_script),
    RiskRule("phishing_meta_keywords", phishing_meta_keywords),
)


def score_html(url: str, html: str, rules: Sequence[RiskRule] = DEFAULT_RULES) -> ContentRiskResult:
    """
    Apply every rule to the parsed page and sum the points.
    An empty document is scored as maximal risk.
    """
    if not html:
        return ContentRiskResult(FAIL_CLOSED_SCORE, fetched=True, reasons=("empty_body",))

    soup = BeautifulSoup(html, "html.parser")
    score = 0
    reasons = []
    for rule in rules:
        points = rule.check(url, html, soup)
        if points < 0:
            raise ValueError(f"rule {rule.name} returned negative points: {points}")
        if points:
            score += points
            reasons.append(rule.name)
    return ContentRiskResult(score, fetched=True, reasons=tuple(reasons))


def scan_content(url: str, fetch: Optional[FetchResult] = None,
                 rules: Sequence[RiskRule] = DEFAULT_RULES) -> ContentRiskResult:
    """
    Main entry point. Fetches the page unless a FetchResult is supplied.
    Unreachable pages get FAIL_CLOSED_SCORE.
    """
    if fetch is None:
        fetch = fetch_page(url, timeout=config.REQUEST_TIMEOUT, max_redirects=config.CONTENT_MAX_REDIRECTS)

    if not fetch.fetched:
        logger.warning("Content scan could not fetch %s: %s", url, fetch.error)
        return ContentRiskResult(FAIL_CLOSED_SCORE, fetched=False, reasons=("fetch_failed",))

    return score_html(url, fetch.text or "", rules)
