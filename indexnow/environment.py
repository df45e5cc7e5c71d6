# ./indexnow/environment.py
"""
Process-wide state used to find the consumer's project root.

Root resolution only talks to an EnvironmentProvider, so tests can hand it a
fake working directory, environment and module location.
"""
import os
from typing import Dict, List, Optional

from .config import settings


class EnvironmentProvider:
    """Real process state: cwd, os.environ, this package's location on disk."""

    def cwd(self) -> str:
        return os.getcwd()

    def getenv(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def module_dir(self) -> str:
        return os.path.dirname(os.path.abspath(__file__))

    def exists(self, path: str) -> bool:
        return os.path.exists(path)


class StaticEnvironment(EnvironmentProvider):
    """Fixed values; filesystem checks still go to disk unless `existing` is given."""

    def __init__(
        self,
        cwd: str,
        env: Optional[Dict[str, str]] = None,
        module_dir: Optional[str] = None,
        existing: Optional[List[str]] = None,
    ):
        self._cwd = cwd
        self._env = dict(env or {})
        self._module_dir = module_dir or cwd
        self._existing = None if existing is None else {os.path.normpath(p) for p in existing}

    def cwd(self) -> str:
        return self._cwd

    def getenv(self, name: str) -> Optional[str]:
        return self._env.get(name)

    def module_dir(self) -> str:
        return self._module_dir

    def exists(self, path: str) -> bool:
        if self._existing is None:
            return os.path.exists(path)
        return os.path.normpath(path) in self._existing


def in_dependency_dir(path: str) -> bool:
    parts = os.path.normpath(path).split(os.sep)
    return any(p in settings.DEPENDENCY_DIRS for p in parts)


def outside_dependency_dir(path: str, env: EnvironmentProvider) -> Optional[str]:
    """
    Nearest ancestor of `path` that is not an installed-dependency location.

    .venv/lib/python3.12/site-packages/indexnow -> the directory holding .venv
    node_modules/pkg -> the directory holding node_modules
    Returns None when `path` is not inside one at all.
    """
    parts = os.path.normpath(path).split(os.sep)
    idx = max((i for i, p in enumerate(parts) if p in settings.DEPENDENCY_DIRS), default=-1)
    if idx == -1:
        return None

    # strip lib/pythonX.Y (or Lib on Windows) in front of site-packages
    head = parts[:idx]
    if parts[idx] != "node_modules":
        while head and (head[-1].lower().startswith("python") or head[-1].lower() in {"lib", "lib64"}):
            head = head[:-1]
    root = os.sep.join(head) or os.sep
    # a virtualenv is itself an install location
    if env.exists(os.path.join(root, "pyvenv.cfg")):
        root = os.path.dirname(root) or os.sep
    return root


def has_project_marker(path: str, env: EnvironmentProvider) -> bool:
    return any(env.exists(os.path.join(path, m)) for m in settings.PROJECT_MARKERS)


def resolve_project_root(
    project_root: Optional[str] = None,
    env: Optional[EnvironmentProvider] = None,
) -> str:
    """
    First candidate outside dependency dirs that carries a project marker:
      1) explicit project_root
      2) originating cwd from the environment (INIT_CWD by default)
      3) current working directory
      4) nearest ancestor of this package outside site-packages / node_modules
    Falls back to the current working directory.
    """
    env = env or EnvironmentProvider()
    from_cwd = os.path.abspath(env.cwd())
    origin = env.getenv(settings.ORIGIN_CWD_ENV)

    candidates = [
        os.path.abspath(project_root) if project_root else None,
        os.path.abspath(origin) if origin else None,
        from_cwd,
        outside_dependency_dir(env.module_dir(), env),
    ]
    for c in candidates:
        if c and not in_dependency_dir(c) and has_project_marker(c, env):
            return c
    return from_cwd
