# ./indexnow/__init__.py
import logging

from .config import __version__, settings
from .environment import EnvironmentProvider, StaticEnvironment, resolve_project_root
from .errors import (
    ConfigurationError,
    HostValidationError,
    IndexNowError,
    InputError,
    PlatformError,
)
from .keystore import FileKeyStore, KeyStore, UnsupportedKeyStore, ensure_key_file
from .models import BatchResult, KeyFileResult, Manifest, SubmitOptions, SubmitResult
from .submitter import submit_indexnow

# silent unless the application configures logging
logging.getLogger("IndexNow").addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "settings",
    "submit_indexnow",
    "ensure_key_file",
    "resolve_project_root",
    "EnvironmentProvider",
    "StaticEnvironment",
    "KeyStore",
    "FileKeyStore",
    "UnsupportedKeyStore",
    "SubmitOptions",
    "SubmitResult",
    "BatchResult",
    "KeyFileResult",
    "Manifest",
    "IndexNowError",
    "InputError",
    "HostValidationError",
    "ConfigurationError",
    "PlatformError",
]
