from __future__ import annotations

import json
from pathlib import Path

import pytest

from indexnow.config import settings
from indexnow.environment import StaticEnvironment
from indexnow.errors import ConfigurationError, PlatformError
from indexnow.keystore import (
    FileKeyStore,
    UnsupportedKeyStore,
    default_key_store,
    ensure_key_file,
)


def _store(root: Path, env: dict[str, str] | None = None) -> FileKeyStore:
    return FileKeyStore(StaticEnvironment(cwd=str(root), env=env))


def _manifest(root: Path, name: str = "indexnow.manifest.json") -> dict:
    return json.loads((root / name).read_text(encoding="utf-8"))


def test_creates_manifest_and_key_file(tmp_path: Path):
    res = _store(tmp_path).ensure(project_root=str(tmp_path))

    assert len(res.key) == 64
    assert res.key_file_route == f"/{res.key}.txt"
    assert res.key_file_path == str(tmp_path / "public" / f"{res.key}.txt")
    assert Path(res.key_file_path).read_text(encoding="utf-8") == res.key
    assert _manifest(tmp_path) == {"key": res.key, "keyFile": res.key_file_route}


def test_manifest_is_source_of_truth(tmp_path: Path):
    store = _store(tmp_path)
    first = store.ensure(project_root=str(tmp_path))
    second = store.ensure(key="someotherkey", project_root=str(tmp_path))
    assert second.key == first.key


def test_key_file_is_rewritten_from_manifest(tmp_path: Path):
    store = _store(tmp_path)
    first = store.ensure(project_root=str(tmp_path))
    Path(first.key_file_path).write_text("tampered", encoding="utf-8")

    again = store.ensure(project_root=str(tmp_path))
    assert again == first
    assert Path(first.key_file_path).read_text(encoding="utf-8") == first.key


def test_explicit_key_used_for_new_manifest(tmp_path: Path):
    res = _store(tmp_path).ensure(key="abc123", project_root=str(tmp_path))
    assert res.key == "abc123"
    assert res.key_file_route == "/abc123.txt"


def test_environment_key_used_for_new_manifest(tmp_path: Path):
    res = _store(tmp_path, env={"INDEXNOW_KEY": "fromenv42"}).ensure(project_root=str(tmp_path))
    assert res.key == "fromenv42"


class TestRotation:
    def test_rotate_to_explicit_key(self, tmp_path: Path):
        store = _store(tmp_path)
        store.ensure(key="oldkey", project_root=str(tmp_path))
        res = store.ensure(key="newkey", project_root=str(tmp_path), force_rotate_key=True)

        assert res.key == "newkey"
        assert res.key_file_route == "/newkey.txt"
        assert _manifest(tmp_path) == {"key": "newkey", "keyFile": "/newkey.txt"}
        assert (tmp_path / "public" / "newkey.txt").read_text(encoding="utf-8") == "newkey"

    def test_rotate_with_same_key_is_noop(self, tmp_path: Path):
        store = _store(tmp_path)
        store.ensure(key="samekey", project_root=str(tmp_path))
        res = store.ensure(key="samekey", project_root=str(tmp_path), force_rotate_key=True)
        assert res.key == "samekey"

    def test_rotate_without_key_keeps_stored_key(self, tmp_path: Path):
        store = _store(tmp_path)
        store.ensure(key="oldkey", project_root=str(tmp_path))
        res = store.ensure(project_root=str(tmp_path), force_rotate_key=True)
        assert res.key == "oldkey"
        assert _manifest(tmp_path) == {"key": "oldkey", "keyFile": "/oldkey.txt"}


def test_custom_public_dir_and_manifest_path(tmp_path: Path):
    res = _store(tmp_path).ensure(
        key="k1",
        public_dir=" static ",
        project_root=str(tmp_path),
        manifest_path="config/indexnow.manifest.json",
    )
    assert res.key_file_path == str(tmp_path / "static" / "k1.txt")
    assert _manifest(tmp_path, "config/indexnow.manifest.json")["key"] == "k1"
    assert not (tmp_path / "indexnow.manifest.json").exists()


def test_absolute_public_dir(tmp_path: Path):
    web = tmp_path / "www" / "html"
    res = _store(tmp_path).ensure(key="k2", public_dir=str(web), project_root=str(tmp_path))
    assert res.key_file_path == str(web / "k2.txt")


def test_blank_public_dir_means_public(tmp_path: Path):
    res = _store(tmp_path).ensure(key="k3", public_dir="   ", project_root=str(tmp_path))
    assert res.key_file_path == str(tmp_path / "public" / "k3.txt")


@pytest.mark.parametrize("content", ["{not json", "[]", '{"keyFile": "/x.txt"}'])
def test_corrupt_manifest(tmp_path: Path, content: str):
    (tmp_path / "indexnow.manifest.json").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        _store(tmp_path).ensure(project_root=str(tmp_path))


def test_unsupported_store_raises_platform_error(tmp_path: Path):
    with pytest.raises(PlatformError):
        ensure_key_file(project_root=str(tmp_path), key_store=UnsupportedKeyStore())


def test_default_store_follows_filesystem_flag(monkeypatch):
    assert isinstance(default_key_store(), FileKeyStore)
    monkeypatch.setattr(settings, "FILESYSTEM_ENABLED", False)
    assert isinstance(default_key_store(), UnsupportedKeyStore)


def test_ensure_key_file_uses_cwd_project(project: Path):
    res = ensure_key_file()
    assert Path(res.key_file_path).parent == project / "public"
    assert (project / "indexnow.manifest.json").exists()
