from __future__ import annotations

import dataclasses
import os

import pytest

import appimagebuild.steps.appimage.python_runtime as python_runtime
from appimagebuild.core.errors import BuildError, CommandFailed


_EXTRACTING_RUNTIME = """
mkdir -p squashfs-root/opt/python3.13/bin
touch squashfs-root/opt/python3.13/bin/python3.13
touch squashfs-root/python.desktop squashfs-root/python.png
ln -s opt/python3.13/bin/python3.13 squashfs-root/AppRun
"""


def test_extract_moves_runtime_into_appdir(cfg, make_executable) -> None:
    make_executable(cfg.runtime_image, _EXTRACTING_RUNTIME)

    appdir = python_runtime.extract_runtime(cfg)

    assert appdir == cfg.appdir
    assert (appdir / "opt" / "python3.13" / "bin" / "python3.13").exists()
    assert not (cfg.work_dir / "squashfs-root").exists()
    # Runtime metadata is replaced by the application's.
    assert not (appdir / "python.desktop").exists()
    assert not (appdir / "python.png").exists()
    assert not (appdir / "AppRun").exists()


def test_extract_replaces_previous_appdir(cfg, make_executable) -> None:
    make_executable(cfg.runtime_image, _EXTRACTING_RUNTIME)
    stale = cfg.appdir / "stale.txt"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")

    python_runtime.extract_runtime(cfg)

    assert not stale.exists()


def test_extract_without_runtime_image_fails(cfg) -> None:
    with pytest.raises(BuildError, match="No runtime image"):
        python_runtime.extract_runtime(cfg)


def test_extract_without_output_fails(cfg, make_executable) -> None:
    make_executable(cfg.runtime_image, "exit 0")

    with pytest.raises(BuildError, match="did not produce"):
        python_runtime.extract_runtime(cfg)


def test_extract_command_failure_propagates(cfg, make_executable) -> None:
    make_executable(cfg.runtime_image, "echo broken >&2; exit 7")

    with pytest.raises(CommandFailed) as exc:
        python_runtime.extract_runtime(cfg)

    assert exc.value.exit_code == 7
    assert "broken" in exc.value.stderr


def test_fetch_uses_local_image(cfg, monkeypatch) -> None:
    cfg.runtime_image.parent.mkdir(parents=True)
    cfg.runtime_image.write_bytes(b"\x7fELF")
    monkeypatch.setattr(python_runtime, "download", lambda url, dst: pytest.fail("unexpected download"))

    image, downloaded = python_runtime.fetch_runtime_image(cfg)

    assert image == cfg.runtime_image
    assert downloaded is False


def test_fetch_downloads_when_absent(cfg, monkeypatch) -> None:
    seen = []

    def _download(url, dst):
        seen.append(url)
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_bytes(b"\x7fELF")

    monkeypatch.setattr(python_runtime, "download", _download)

    image, downloaded = python_runtime.fetch_runtime_image(cfg)

    assert downloaded is True
    assert seen == [cfg.runtime_url]
    assert image.stat().st_mode & 0o111


def test_fetch_with_missing_explicit_image_fails(cfg) -> None:
    cfg = dataclasses.replace(cfg, runtime_image_override=cfg.root / "missing.AppImage")

    with pytest.raises(BuildError, match="Runtime image not found"):
        python_runtime.fetch_runtime_image(cfg)


def test_newest_wheel_prefers_latest(cfg) -> None:
    cfg.wheel_dir.mkdir(parents=True)
    old = cfg.wheel_dir / "OSCR-1.0-py3-none-any.whl"
    new = cfg.wheel_dir / "OSCR-1.1-py3-none-any.whl"
    old.write_bytes(b"PK")
    new.write_bytes(b"PK")
    os.utime(old, (1_000, 1_000))
    os.utime(new, (2_000, 2_000))

    assert python_runtime.newest_wheel(cfg) == new


def test_extract_removes_nested_runtime_metadata(cfg, make_executable) -> None:
    make_executable(
        cfg.runtime_image,
        _EXTRACTING_RUNTIME
        + """
mkdir -p squashfs-root/usr/share/applications squashfs-root/usr/share/metainfo
mkdir -p squashfs-root/usr/share/icons/hicolor/256x256/apps
touch squashfs-root/usr/share/applications/python3.13.2.desktop
touch squashfs-root/usr/share/metainfo/python3.13.2.appdata.xml
touch squashfs-root/usr/share/icons/hicolor/256x256/apps/python.png
touch squashfs-root/usr/share/icons/hicolor/256x256/apps/keep.png
""",
    )

    appdir = python_runtime.extract_runtime(cfg)

    share = appdir / "usr" / "share"
    assert list((share / "applications").iterdir()) == []
    assert list((share / "metainfo").iterdir()) == []
    assert [p.name for p in (share / "icons" / "hicolor" / "256x256" / "apps").iterdir()] == ["keep.png"]
    assert (appdir / "opt" / "python3.13" / "bin" / "python3.13").exists()
