from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from appimagebuild.core.config import BuildConfig


# Never let a test pick up a developer's build overrides.
for _name in list(os.environ):
    if _name.startswith("OSCR_"):
        os.environ.pop(_name, None)


@pytest.fixture
def cfg(tmp_path: Path) -> BuildConfig:
    """A config rooted at a temporary project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return BuildConfig(root=root)


@pytest.fixture
def make_executable():
    """Write a small shell script and mark it executable."""

    def _make(path: Path, body: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n" + body.strip() + "\n", encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
