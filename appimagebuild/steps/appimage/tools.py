from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ...core.config import BuildConfig
from ...core.errors import BuildError

from .common import chmod_x, download


logger = logging.getLogger(__name__)


def cached_appimagetool(cfg: BuildConfig) -> Path:
    return cfg.tools_dir / f"appimagetool-{cfg.arch}.AppImage"


def resolve_appimagetool(cfg: BuildConfig, *, allow_download: bool = True) -> Path:
    """Find appimagetool: explicit path, PATH, tools cache, then download."""

    if cfg.appimagetool_override is not None:
        tool = cfg.appimagetool_override
        if not tool.exists():
            raise BuildError(f"appimagetool not found: {tool}")
        return tool

    on_path = shutil.which("appimagetool")
    if on_path:
        return Path(on_path)

    cached = cached_appimagetool(cfg)
    if cached.exists():
        chmod_x(cached)
        return cached

    if not allow_download:
        raise BuildError("appimagetool not found on PATH or in the tools directory")

    download(cfg.appimagetool_url, cached)
    chmod_x(cached)
    return cached


def appimagetool_command(tool: Path, appdir: Path, out: Path) -> list[str]:
    args = [str(tool)]
    # FUSE is often unavailable in containers and CI.
    if tool.name.endswith(".AppImage"):
        args.append("--appimage-extract-and-run")
    args += [str(appdir), str(out)]
    return args


def python_appimage_command(cfg: BuildConfig) -> list[str]:
    """Command for the python-appimage helper, preferring its console script."""

    script = cfg.venv_path / "bin" / "python-appimage"
    if script.exists():
        base = [str(script)]
    else:
        python = cfg.venv_python if cfg.venv_python.exists() else Path(shutil.which("python3") or "python3")
        logger.debug("python-appimage console script missing; using %s -m python_appimage", python)
        base = [str(python), "-m", "python_appimage"]

    return base + [
        "build",
        "app",
        "--python-version",
        cfg.python_version,
        "--name",
        cfg.app_name,
        str(cfg.recipe_path),
    ]
