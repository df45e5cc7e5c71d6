# ./indexnow/utils.py
import json
import os
import secrets
from typing import Any, Dict, List, Sequence, TypeVar, Union
from urllib.parse import urlsplit, urlunsplit

from .config import settings
from .errors import InputError

T = TypeVar("T")


def save_file(path: str, content: str) -> None:
    """Create parent directories and write the file (plain overwrite)."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def json_payload(data: Dict[str, Any], indent: int | None = None) -> str:
    """Serialize a dict → JSON string."""
    return json.dumps(data, ensure_ascii=False, indent=indent)


def generate_key(n_bytes: int = 32) -> str:
    """Random hex key; 32 bytes gives the usual 64 characters."""
    return secrets.token_hex(n_bytes)


def normalize_url(url: str) -> str:
    """
    Canonical absolute form: lowercase scheme and host, "/" for an empty path.
    Raises InputError for anything without a scheme and host.
    """
    raw = str(url).strip()
    try:
        parts = urlsplit(raw)
        host = settings.host_of(raw)
    except ValueError as exc:
        raise InputError(f"Invalid URL: {raw!r} ({exc})") from exc
    if not parts.scheme or not host:
        raise InputError(f"Invalid URL: {raw!r} (absolute URL with scheme and host required)")

    netloc = host
    if "@" in parts.netloc:
        netloc = parts.netloc.rsplit("@", 1)[0] + "@" + host
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), netloc, path, parts.query, parts.fragment))


def normalize_urls(urls: Union[str, Sequence[str]]) -> List[str]:
    items = [urls] if isinstance(urls, str) else list(urls)
    return [normalize_url(u) for u in items]


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """Split into contiguous slices of at most `size`, order preserved."""
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def clamp_batch_size(size: int | None) -> int:
    if size is None:
        size = settings.BATCH_SIZE
    return min(max(1, int(size)), settings.MAX_BATCH_SIZE)
