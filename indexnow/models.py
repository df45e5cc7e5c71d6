# ./indexnow/models.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Union

from .config import settings
from .utils import clamp_batch_size


class SubmitOptions(BaseModel):
    """One call's worth of work for submit_indexnow()."""
    model_config = ConfigDict(populate_by_name=True)

    urls: Union[str, List[str]]
    key: Optional[str] = None            # omitted -> generated & persisted when fs is available
    host: Optional[str] = None           # omitted -> host of the first URL
    key_location: Optional[str] = Field(default=None, alias="keyLocation")
    endpoint: str = Field(default_factory=lambda: settings.ENDPOINT)

    batch_size: int = Field(
        default_factory=lambda: settings.BATCH_SIZE, alias="batchSize", validate_default=True
    )
    retries: int = Field(default_factory=lambda: settings.RETRIES, ge=0)
    retry_base_ms: int = Field(default_factory=lambda: settings.RETRY_BASE_MS, alias="retryBaseMs", ge=0)
    timeout: float = Field(default_factory=lambda: settings.TIMEOUT, gt=0)

    ensure_key_file: bool = Field(default=True, alias="ensureKeyFile")
    public_dir: Optional[str] = Field(default=None, alias="publicDir")        # e.g. "static", "public_html"
    project_root: Optional[str] = Field(default=None, alias="projectRoot")
    manifest_path: Optional[str] = Field(default=None, alias="manifestPath")
    force_rotate_key: bool = Field(default=False, alias="forceRotateKey")

    @field_validator("urls", mode="before")
    @classmethod
    def _urls_as_strings(cls, v):
        # anything else is stringified and left to URL normalization to reject
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return [u if isinstance(u, str) else str(u) for u in v]
        return v if isinstance(v, str) else str(v)

    @field_validator("batch_size", mode="before")
    @classmethod
    def _clamp_batch_size(cls, v):
        return clamp_batch_size(v)


class Manifest(BaseModel):
    """On-disk record binding a project to its key: {"key": ..., "keyFile": "/<key>.txt"}."""
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(min_length=1)
    key_file: str = Field(alias="keyFile")

    @classmethod
    def for_key(cls, key: str) -> "Manifest":
        return cls(key=key, key_file=f"/{key}.txt")


class KeyFileResult(BaseModel):
    key: str
    key_file_route: str      # "/<key>.txt"
    key_file_path: str       # absolute path on disk


class BatchResult(BaseModel):
    ok: bool
    status: int
    upstream_text: str
    sent_count: int


class SubmitResult(BaseModel):
    host: str
    total: int
    key_used: str
    key_file_path: Optional[str] = None
    key_file_route: Optional[str] = None
    batches: List[BatchResult]
