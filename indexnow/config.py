# ./indexnow/config.py
import os
from urllib.parse import urlsplit

__version__ = "0.3.0"

DEFAULT_PORTS = {"http": 80, "https": 443}


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in {"0", "false", "no", "off"}


class Settings:
    """Load environment variables once – used everywhere."""
    ENDPOINT: str = os.getenv("INDEXNOW_ENDPOINT", "https://api.indexnow.org/indexnow")
    USER_AGENT: str = os.getenv("INDEXNOW_USER_AGENT", f"indexnow-python/{__version__}")

    # Protocol limit: 10k URLs per request
    MAX_BATCH_SIZE: int = 10000
    BATCH_SIZE: int = int(os.getenv("INDEXNOW_BATCH_SIZE", str(MAX_BATCH_SIZE)))
    RETRIES: int = int(os.getenv("INDEXNOW_RETRIES", "2"))
    RETRY_BASE_MS: int = int(os.getenv("INDEXNOW_RETRY_BASE_MS", "500"))
    TIMEOUT: float = float(os.getenv("INDEXNOW_TIMEOUT", "30"))

    PUBLIC_DIR: str = os.getenv("INDEXNOW_PUBLIC_DIR", "public")
    MANIFEST_NAME: str = "indexnow.manifest.json"

    # npm sets INIT_CWD to the originating project during lifecycle scripts
    ORIGIN_CWD_ENV: str = os.getenv("INDEXNOW_ORIGIN_CWD_ENV", "INIT_CWD")
    KEY_ENV: str = "INDEXNOW_KEY"
    FILESYSTEM_ENABLED: bool = _flag("INDEXNOW_FILESYSTEM", "1")

    PROJECT_MARKERS = (
        "pyproject.toml",
        "setup.py",
        "setup.cfg",
        "requirements.txt",
        "package.json",
    )
    DEPENDENCY_DIRS = {"site-packages", "dist-packages", "node_modules"}

    @staticmethod
    def host_of(url: str) -> str:
        """Host as IndexNow wants it – hostname plus explicit port, no userinfo."""
        parts = urlsplit(url)
        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        if parts.port is not None and parts.port != DEFAULT_PORTS.get(parts.scheme.lower()):
            host = f"{host}:{parts.port}"
        return host

settings = Settings()
