# ./indexnow/errors.py


class IndexNowError(Exception):
    """Base class for everything this package raises."""


class InputError(IndexNowError, ValueError):
    """Empty URL list or an entry that is not an absolute URL."""


class HostValidationError(IndexNowError, ValueError):
    """URLs in one submission span more than one host."""

    def __init__(self, expected: str, actual: str, url: str):
        self.expected = expected
        self.actual = actual
        self.url = url
        super().__init__(
            f'All URLs must share the same host. Expected "{expected}", got "{actual}" for {url}'
        )


class ConfigurationError(IndexNowError):
    """No key could be resolved, or the manifest on disk is unusable."""


class PlatformError(IndexNowError):
    """Filesystem provisioning requested where no filesystem key store exists."""
