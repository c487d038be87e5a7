"""
Pytest configuration and fixtures for test isolation.
"""
import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True, scope="function")
def reset_environment():
    """Reset environment variables between tests."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """
    Keep user settings and CODE_BUNDLER_* variables out of the tests:
    HOME points at an empty temp directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for name in list(os.environ):
        if name.startswith("CODE_BUNDLER_"):
            monkeypatch.delenv(name, raising=False)


def write_file(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
    return path


A_PY = "import os\n\nx = 1\ny = 2\n   \nz = 3\nprint(x)\nprint(y)\nprint(z)\nend = True"
B_PY = "def f():\n    return 1\nf()\nf()\nf()"


@pytest.fixture
def project_dir(tmp_path):
    """
    A small project tree:
        a.py          10 lines, 2 of them blank
        b.py           5 lines, none blank
        notes.md
        web/app.JS
        bin/c.py      build output, always skipped
        obj/Debug/d.py
    """
    root = tmp_path / "project"
    root.mkdir()
    write_file(root, "a.py", A_PY)
    write_file(root, "b.py", B_PY)
    write_file(root, "notes.md", "# Notes\n")
    write_file(root, "web/app.JS", "console.log('hi');\n")
    write_file(root, "bin/c.py", "compiled = True\n")
    write_file(root, "obj/Debug/d.py", "also_compiled = True\n")
    return root


@pytest.fixture
def make_file():
    """Return a helper that writes a file (creating parents) under a root."""
    return write_file
