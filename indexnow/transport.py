# ./indexnow/transport.py
import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from .config import settings
from .error_policy import decide_action, is_success
from .models import BatchResult
from .utils import json_payload

HEADERS = {"Content-Type": "application/json; charset=utf-8"}

logger = logging.getLogger("IndexNow")


def make_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": settings.USER_AGENT})
    return session


def post_once(
    session: requests.Session, endpoint: str, payload: Dict[str, Any], timeout: float
) -> tuple[int, str]:
    """
    Return (status_code, text); (0, error message) on network error.
    """
    try:
        resp = session.post(endpoint, data=json_payload(payload).encode("utf-8"), headers=HEADERS, timeout=timeout)
        # no raise_for_status(): status and body go back to the caller as data
        return resp.status_code, resp.text
    except requests.RequestException as exc:
        return 0, f"{type(exc).__name__}: {exc}"


def post_with_retry(
    endpoint: str,
    payload: Dict[str, Any],
    retries: int,
    retry_base_ms: int,
    *,
    session: Optional[requests.Session] = None,
    sleep: Optional[Callable[[float], None]] = None,
    timeout: Optional[float] = None,
    log: Optional[logging.Logger] = None,
) -> BatchResult:
    """
    POST one batch. 429 and 5xx are retried up to `retries` more times, waiting
    retry_base_ms * 2**attempt between tries; the last response is returned
    as-is once attempts run out.
    """
    session = session or make_session()
    sleep = sleep or time.sleep
    timeout = timeout or settings.TIMEOUT
    log = log or logger
    sent = len(payload.get("urlList", []))

    attempt = 0
    while True:
        status, text = post_once(session, endpoint, payload, timeout)
        should_retry, note = decide_action(status)
        log.debug("POST %s urls=%d attempt=%d -> %s (%s)", endpoint, sent, attempt + 1, status, note)

        if not should_retry or attempt >= retries:
            if should_retry:
                log.warning("giving up on %s after %d attempts: %s %s", endpoint, attempt + 1, status, note)
            return BatchResult(ok=is_success(status), status=status, upstream_text=text, sent_count=sent)

        delay_ms = retry_base_ms * (2 ** attempt)
        log.info("retrying %s in %dms (status=%s)", endpoint, delay_ms, status)
        sleep(delay_ms / 1000.0)
        attempt += 1
