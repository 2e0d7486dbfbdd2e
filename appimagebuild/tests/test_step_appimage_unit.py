from __future__ import annotations

import dataclasses
import hashlib

import pytest

from appimagebuild.core.errors import BuildError, CommandFailed
from appimagebuild.steps.step_appimage import checksum_runner, package_runner


# Fake appimagetool: `appimagetool <appdir> <out>` writes the output file.
_TOOL = 'for last; do :; done\necho "appimagetool $*"\nprintf "IMAGE" > "$last"'


@pytest.fixture
def ready_appdir(cfg):
    cfg.appdir.mkdir(parents=True)
    (cfg.appdir / "AppRun").write_text("#!/bin/sh\n", encoding="utf-8")
    return cfg


def test_package_builds_image(ready_appdir, make_executable, tmp_path) -> None:
    tool = make_executable(tmp_path / "bin" / "appimagetool", _TOOL)
    cfg = dataclasses.replace(ready_appdir, appimagetool_override=tool)

    result = package_runner(cfg)

    assert result.exit_code == 0
    assert cfg.output_image.read_bytes() == b"IMAGE"
    assert "--appimage-extract-and-run" not in result.command_str
    assert f"Built AppImage: {cfg.output_image}" in result.stdout


def test_package_propagates_tool_failure(ready_appdir, make_executable, tmp_path) -> None:
    tool = make_executable(tmp_path / "bin" / "appimagetool", "echo nope >&2; exit 4")
    cfg = dataclasses.replace(ready_appdir, appimagetool_override=tool)

    with pytest.raises(CommandFailed) as exc:
        package_runner(cfg)

    assert exc.value.exit_code == 4


def test_package_requires_output(ready_appdir, make_executable, tmp_path) -> None:
    tool = make_executable(tmp_path / "bin" / "appimagetool", "exit 0")
    cfg = dataclasses.replace(ready_appdir, appimagetool_override=tool)

    with pytest.raises(BuildError, match="did not produce"):
        package_runner(cfg)


def test_package_requires_apprun(cfg) -> None:
    cfg.appdir.mkdir(parents=True)

    with pytest.raises(BuildError, match="no AppRun"):
        package_runner(cfg)


def test_checksum_writes_sidecar(cfg) -> None:
    cfg.output_image.parent.mkdir(parents=True)
    cfg.output_image.write_bytes(b"IMAGE")

    result = checksum_runner(cfg)

    digest = hashlib.sha256(b"IMAGE").hexdigest()
    sidecar = cfg.output_image.with_name(cfg.output_image.name + ".sha256")
    assert sidecar.read_text(encoding="utf-8") == f"{digest}  OSCR-x86_64.AppImage\n"
    assert digest in result.stdout


def test_checksum_requires_image(cfg) -> None:
    with pytest.raises(BuildError, match="AppImage not found"):
        checksum_runner(cfg)


def test_smoke_missing_image_exits_2(cfg) -> None:
    from appimagebuild.steps.step_appimage_smoke import appimage_smoke_runner

    result = appimage_smoke_runner(cfg)

    assert result.exit_code == 2
    assert "AppImage not found" in result.stderr


def test_smoke_can_be_skipped(cfg, monkeypatch) -> None:
    from appimagebuild.steps.step_appimage_smoke import appimage_smoke_runner

    monkeypatch.setenv("OSCR_SKIP_APPIMAGE_SMOKE", "1")

    result = appimage_smoke_runner(cfg)

    assert result.exit_code == 0
    assert "Skipping" in result.stdout
