# ./indexnow/error_policy.py
from typing import Tuple, Dict

# Responses documented by the IndexNow endpoint and what to do with them.
# Each code -> (retry: bool, note)
ERROR_POLICY: Dict[int, Tuple[bool, str]] = {
    200: (False, "OK - URLs submitted"),
    202: (False, "Accepted - key validation pending"),
    400: (False, "Bad Request - invalid format, do not retry"),
    403: (False, "Forbidden - key not valid, do not retry"),
    404: (False, "Not Found - do not retry"),
    422: (False, "Unprocessable Entity - URLs do not belong to host, do not retry"),
    429: (True, "Too Many Requests - retry with backoff"),
    500: (True, "Server Error - retry with backoff"),
    502: (True, "Bad Gateway - retry"),
    503: (True, "Service Unavailable - retry"),
    504: (True, "Gateway Timeout - retry"),
}


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def decide_action(status_code: int) -> Tuple[bool, str]:
    """Return (should_retry, note)."""
    if status_code in ERROR_POLICY:
        return ERROR_POLICY[status_code]
    if is_success(status_code):
        return False, "Success"
    # 0 stands for "no response" (network error)
    if status_code >= 500 or status_code == 0:
        return True, "Unknown server error - retry with backoff"
    return False, "Client error - do not retry"
