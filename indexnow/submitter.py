# ./indexnow/submitter.py
"""
Framework-agnostic IndexNow submitter with built-in key-file creation.

- Accepts a single URL or a list of URLs (all on one host)
- Ensures /<KEY>.txt exists in the project's public dir when no key is given
- POSTs JSON to https://api.indexnow.org/indexnow
- Chunks to 10k URLs per request; light retries on 429/5xx
"""
import logging
import time
from typing import Callable, List, Optional

import requests

from .config import settings
from .errors import ConfigurationError, HostValidationError, InputError
from .keystore import KeyStore, default_key_store
from .models import BatchResult, SubmitOptions, SubmitResult
from .transport import make_session, post_with_retry
from .utils import chunk, normalize_urls

logger = logging.getLogger("IndexNow")


def check_single_host(urls: List[str], host: Optional[str] = None) -> str:
    """Return the shared host, or raise on the first URL that leaves it."""
    expected = host or settings.host_of(urls[0])
    for u in urls:
        actual = settings.host_of(u)
        if actual != expected:
            raise HostValidationError(expected, actual, u)
    return expected


def submit_indexnow(
    options: Optional[SubmitOptions] = None,
    *,
    session: Optional[requests.Session] = None,
    key_store: Optional[KeyStore] = None,
    log: Optional[logging.Logger] = None,
    sleep: Optional[Callable[[float], None]] = None,
    **kwargs,
) -> SubmitResult:
    """
    Submit URLs to IndexNow.

    Either pass a SubmitOptions or its fields as keyword arguments
    (submit_indexnow(urls=[...], host="example.com")). Batches go out one after
    another; a failed batch is reported in the result and does not stop the rest.
    """
    if options is not None and kwargs:
        raise TypeError("pass either a SubmitOptions or keyword options, not both")
    opts = options or SubmitOptions(**kwargs)
    log = log or logger

    urls = normalize_urls(opts.urls)
    if not urls:
        raise InputError("No URLs provided")
    host = check_single_host(urls, opts.host)

    key = opts.key
    key_file_route: Optional[str] = None
    key_file_path: Optional[str] = None

    # a caller-supplied key is used as is; the key store only sees it on rotation
    store = key_store or default_key_store()
    if (not key or opts.force_rotate_key) and opts.ensure_key_file and store.available:
        ensured = store.ensure(
            key=key,
            public_dir=opts.public_dir,
            project_root=opts.project_root,
            manifest_path=opts.manifest_path,
            force_rotate_key=opts.force_rotate_key,
        )
        key = ensured.key
        key_file_route = ensured.key_file_route
        key_file_path = ensured.key_file_path

    if not key:
        raise ConfigurationError(
            "IndexNow key is missing. Pass key=..., or run where the key file can be "
            "generated and written to disk."
        )

    key_location = opts.key_location
    if not key_location and key_file_route:
        key_location = f"https://{host}{key_file_route}"

    session = session or make_session()
    results: List[BatchResult] = []
    for batch in chunk(urls, opts.batch_size):
        payload = {"host": host, "key": key, "urlList": batch}
        if key_location:
            payload["keyLocation"] = key_location
        results.append(
            post_with_retry(
                opts.endpoint,
                payload,
                opts.retries,
                opts.retry_base_ms,
                session=session,
                sleep=sleep or time.sleep,
                timeout=opts.timeout,
                log=log,
            )
        )

    log.debug("submitted %d urls for %s in %d batches", len(urls), host, len(results))
    return SubmitResult(
        host=host,
        total=len(urls),
        key_used=key,
        key_file_path=key_file_path,
        key_file_route=key_file_route,
        batches=results,
    )
