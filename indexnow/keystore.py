# ./indexnow/keystore.py
import json
import logging
import os
from typing import Optional

from pydantic import ValidationError

from .config import settings
from .environment import EnvironmentProvider, resolve_project_root
from .errors import ConfigurationError, PlatformError
from .models import KeyFileResult, Manifest
from .utils import generate_key, json_payload, save_file

logger = logging.getLogger("IndexNow")


class KeyStore:
    """Where the key manifest and the public key file live."""

    available: bool = False

    def ensure(
        self,
        key: Optional[str] = None,
        public_dir: Optional[str] = None,
        project_root: Optional[str] = None,
        manifest_path: Optional[str] = None,
        force_rotate_key: bool = False,
    ) -> KeyFileResult:
        raise NotImplementedError


class UnsupportedKeyStore(KeyStore):
    """For runtimes without a writable filesystem."""

    def ensure(self, *args, **kwargs) -> KeyFileResult:
        raise PlatformError(
            "Filesystem not available. ensure_key_file must run where the key file can be written."
        )


class FileKeyStore(KeyStore):
    """
    Keeps <projectRoot>/indexnow.manifest.json and <publicDir>/<key>.txt in sync.

    The manifest is the source of truth for the key; the key file is rewritten
    from it on every call.
    """

    available = True

    def __init__(self, environment: Optional[EnvironmentProvider] = None):
        self.environment = environment or EnvironmentProvider()

    def ensure(
        self,
        key: Optional[str] = None,
        public_dir: Optional[str] = None,
        project_root: Optional[str] = None,
        manifest_path: Optional[str] = None,
        force_rotate_key: bool = False,
    ) -> KeyFileResult:
        root = resolve_project_root(project_root, self.environment)
        public_path = self._public_dir(root, public_dir)
        manifest_file = self._manifest_path(root, manifest_path)

        if os.path.exists(manifest_file):
            manifest = self.read_manifest(manifest_file)
            if force_rotate_key and key and key != manifest.key:
                manifest = Manifest.for_key(key)
                self.write_manifest(manifest_file, manifest)
                logger.info("rotated IndexNow key in %s", manifest_file)
        else:
            new_key = key or self.environment.getenv(settings.KEY_ENV) or generate_key()
            manifest = Manifest.for_key(new_key)
            self.write_manifest(manifest_file, manifest)
            logger.info("created IndexNow manifest %s", manifest_file)

        key_file_path = os.path.join(public_path, manifest.key_file.lstrip("/"))
        save_file(key_file_path, manifest.key)
        logger.debug("wrote key file %s", key_file_path)

        return KeyFileResult(
            key=manifest.key,
            key_file_route=manifest.key_file,
            key_file_path=key_file_path,
        )

    @staticmethod
    def _public_dir(root: str, public_dir: Optional[str]) -> str:
        name = (public_dir or "").strip() or settings.PUBLIC_DIR
        return name if os.path.isabs(name) else os.path.join(root, name)

    @staticmethod
    def _manifest_path(root: str, manifest_path: Optional[str]) -> str:
        if not manifest_path:
            return os.path.join(root, settings.MANIFEST_NAME)
        return manifest_path if os.path.isabs(manifest_path) else os.path.join(root, manifest_path)

    @staticmethod
    def read_manifest(path: str) -> Manifest:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return Manifest.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ConfigurationError(f"Unreadable IndexNow manifest {path}: {exc}") from exc

    @staticmethod
    def write_manifest(path: str, manifest: Manifest) -> None:
        save_file(path, json_payload(manifest.model_dump(by_alias=True), indent=2))


def default_key_store(environment: Optional[EnvironmentProvider] = None) -> KeyStore:
    if not settings.FILESYSTEM_ENABLED:
        return UnsupportedKeyStore()
    return FileKeyStore(environment)


def ensure_key_file(
    key: Optional[str] = None,
    public_dir: Optional[str] = None,
    project_root: Optional[str] = None,
    manifest_path: Optional[str] = None,
    force_rotate_key: bool = False,
    *,
    environment: Optional[EnvironmentProvider] = None,
    key_store: Optional[KeyStore] = None,
) -> KeyFileResult:
    """Make sure the manifest and <publicDir>/<key>.txt exist; return key, route and path."""
    store = key_store or default_key_store(environment)
    return store.ensure(
        key=key,
        public_dir=public_dir,
        project_root=project_root,
        manifest_path=manifest_path,
        force_rotate_key=force_rotate_key,
    )
