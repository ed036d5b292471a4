import os
import stat
import pytest


@pytest.fixture(autouse=True)
def deskrun_env(monkeypatch, tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.setenv("XDG_DATA_DIRS", str(tmp_path / "usr" / "share"))
    monkeypatch.setenv("DESKRUN_CONFIG_PATH", str(home / ".config" / "deskrun" / "config.json"))
    monkeypatch.setenv("DESKRUN_CACHE_PATH", str(home / ".cache" / "deskrun.json"))
    monkeypatch.setenv("LANG", "en_US.UTF-8")
    monkeypatch.delenv("LC_ALL", raising=False)
    monkeypatch.delenv("LC_MESSAGES", raising=False)
    return home


@pytest.fixture
def write_desktop():
    """Write a desktop file: write_desktop(root, "sub/app.desktop", Name="App", Exec="app")."""
    def _write(root, rel, group="Desktop Entry", extra="", **keys):
        keys.setdefault("Type", "Application")
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [f"[{group}]"] + [f"{k}={v}" for k, v in keys.items() if v is not None]
        path.write_text("\n".join(lines) + "\n" + extra, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def bin_dir(tmp_path):
    """A PATH directory; make_exe(name) drops an executable stub into it."""
    d = tmp_path / "bin"
    d.mkdir()
    return d


@pytest.fixture
def make_exe(bin_dir):
    def _make(name, body="#!/bin/sh\nexit 0\n"):
        path = bin_dir / name
        path.write_text(body, encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)
    return _make


@pytest.fixture
def roots(tmp_path):
    """Two priority directories: user-local first, system second."""
    user = tmp_path / "home" / ".local" / "share" / "applications"
    system = tmp_path / "usr" / "share" / "applications"
    user.mkdir(parents=True, exist_ok=True)
    system.mkdir(parents=True, exist_ok=True)
    return user, system


class ExecCalled(Exception):
    def __init__(self, path, argv, env):
        super().__init__(path)
        self.path = path
        self.argv = list(argv)
        self.env = env


@pytest.fixture
def fake_exec():
    def _exec(path, argv, env):
        raise ExecCalled(path, argv, env)
    _exec.error = ExecCalled
    return _exec


@pytest.fixture(autouse=True)
def restore_cwd():
    cwd = os.getcwd()
    yield
    os.chdir(cwd)
