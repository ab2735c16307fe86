"""
scanner.py
Main orchestration of the URL evaluation pipeline.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple
import logging

from .heuristics import check_url_length, check_domain_validity
from .redirects import RedirectOutcome, resolve_redirect_safety
from ..html_scanner import ContentRiskResult, scan_content
from ..fetcher import fetch_page
from .. import config

logger = logging.getLogger("scanner")


class InputError(ValueError):
    """The request did not carry a usable URL."""


@dataclass(frozen=True)
class EvaluationReport:
    url: str
    url_length_valid: bool
    domain_valid: bool
    redirection_safe: bool
    source_code_phishing: bool
    risk_score: int

    @property
    def is_safe(self) -> bool:
        return (self.url_length_valid and self.domain_valid
                and self.redirection_safe and not self.source_code_phishing)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isSafe": self.is_safe,
            "details": {
                "urlLength": self.url_length_valid,
                "domainValid": self.domain_valid,
                "redirectionSafe": self.redirection_safe,
                "sourceCodePhishing": self.source_code_phishing,
                "riskScore": self.risk_score,
            },
        }


def _network_checks(url: str, shared_fetch: bool) -> Tuple[RedirectOutcome, ContentRiskResult]:
    if shared_fetch:
        fetch = fetch_page(url, max_redirects=config.MAX_REDIRECTS, timeout=config.REQUEST_TIMEOUT)
        return resolve_redirect_safety(url, fetch), scan_content(url, fetch)

    # two independent fetches, joined before the report is built
    with ThreadPoolExecutor(max_workers=2) as pool:
        redirect_future = pool.submit(resolve_redirect_safety, url)
        content_future = pool.submit(scan_content, url)
        return redirect_future.result(), content_future.result()


def log_report(report: EvaluationReport) -> None:
    logger.info("-" * 50)
    logger.info("Full Report for: %s", report.url)
    logger.info("URL Length Valid: %s", report.url_length_valid)
    logger.info("Domain Valid: %s", report.domain_valid)
    logger.info("Redirection Safe: %s", report.redirection_safe)
    logger.info("Source Code Phishing Detected: %s", report.source_code_phishing)
    logger.info("Risk Score: %s", report.risk_score)
    logger.info("Final Verdict: %s", "Legitimate" if report.is_safe else "Phishing")
    logger.info("-" * 50)


def evaluate(url: Any, shared_fetch: Optional[bool] = None) -> EvaluationReport:
    """
    Run all checks (lexical, redirect, page content) on a given URL.

    Raises InputError for a missing/empty URL. Check failures never raise;
    they show up as unsafe signals in the report.
    """
    if not url:
        raise InputError("URL is required")
    if not isinstance(url, str):
        raise InputError("URL must be a string")
    if shared_fetch is None:
        shared_fetch = config.SHARED_FETCH

    logger.info("Checking URL: %s", url)

    # 1. Lexical
    length_ok = check_url_length(url)
    domain_ok = check_domain_validity(url)

    # 2. Redirects + 3. page content
    redirect, content = _network_checks(url, shared_fetch)

    report = EvaluationReport(
        url=url,
        url_length_valid=length_ok,
        domain_valid=domain_ok,
        redirection_safe=redirect.safe,
        source_code_phishing=content.is_phishing,
        risk_score=content.risk_score,
    )
    log_report(report)
    return report
