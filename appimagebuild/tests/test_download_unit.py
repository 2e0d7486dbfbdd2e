from __future__ import annotations

import json
import urllib.error

import pytest

import appimagebuild.steps.appimage.common as common
from appimagebuild.core.errors import BuildError
from appimagebuild.core.runner import run
from appimagebuild.steps.step_defs import steps
from appimagebuild.utils.paths import buildlog_dir


class _BrokenResponse:
    """Yields one chunk, then the connection drops."""

    def __init__(self) -> None:
        self._reads = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        return None

    def read(self, size: int = -1) -> bytes:
        self._reads += 1
        if self._reads == 1:
            return b"partial"
        raise ConnectionResetError("connection reset by peer")


def _unreachable(url):
    raise urllib.error.URLError("network unreachable")


def test_download_error_becomes_build_error(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(common.urllib.request, "urlopen", _unreachable)

    with pytest.raises(BuildError, match="Download failed: https://example.invalid/x"):
        common.download("https://example.invalid/x", tmp_path / "x.AppImage")


def test_interrupted_download_removes_part_file(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(common.urllib.request, "urlopen", lambda url: _BrokenResponse())
    dst = tmp_path / "tools" / "appimagetool.AppImage"

    with pytest.raises(BuildError, match="connection reset"):
        common.download("https://example.invalid/tool", dst)

    assert not dst.exists()
    assert list(dst.parent.iterdir()) == []


def test_runtime_download_failure_fails_the_build_cleanly(cfg, monkeypatch, capsys) -> None:
    monkeypatch.setattr(common.urllib.request, "urlopen", _unreachable)
    runtime_step = next(s for s in steps(cfg) if s.name == "Runtime")

    rc = run([runtime_step], cfg, verbose=False, continue_on_error=False)

    assert rc == 1
    assert "Download failed" in runtime_step.log_file.read_text(encoding="utf-8")
    summary = json.loads((buildlog_dir(cfg.root) / "build-summary.json").read_text(encoding="utf-8"))
    assert summary["passed"] is False
    assert not cfg.runtime_image.exists()
    assert not cfg.runtime_image.with_name(cfg.runtime_image.name + ".part").exists()
    assert "Download failed" in capsys.readouterr().out
