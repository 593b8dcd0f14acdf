"""Shared fixtures for depfetch tests."""

import json
import os

import pytest

from constants import Constants


def write_package(store_dir, name, version="1.0.0", **extra):
    """Create ``store_dir/<name>/package.json`` and return the package dir."""
    pkg_dir = os.path.join(str(store_dir), *name.split("/"))
    os.makedirs(pkg_dir, exist_ok=True)
    manifest = {"name": name, "version": version}
    manifest.update(extra)
    with open(os.path.join(pkg_dir, "package.json"), "w", encoding="utf-8") as f:
        json.dump(manifest, f)
    return pkg_dir


@pytest.fixture(autouse=True)
def _isolate_constants(monkeypatch):
    """Keep tests independent of NODE_PATH and of Constants mutations."""
    for var in (Constants.NODE_PATH_ENV, Constants.NPM_COMMAND_ENV, Constants.LOG_LEVEL_ENV):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(Constants, "NPM_COMMAND", "npm")
    monkeypatch.setattr(Constants, "OUTPUT_DIALECT", "plus")
    monkeypatch.setattr(Constants, "EXTRA_SEARCH_PATHS", [])
    monkeypatch.setattr(Constants, "LOG_LEVEL", None)


@pytest.fixture
def npm_on_path(monkeypatch):
    """Pretend npm is installed so no real executable is needed."""
    monkeypatch.setattr("fetch.invoker.shutil.which", lambda cmd: f"/usr/bin/{cmd}")


@pytest.fixture
def make_package():
    return write_package
