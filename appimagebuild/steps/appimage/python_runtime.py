from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ...core.config import BuildConfig
from ...core.errors import BuildError

from .common import chmod_x, download, first_existing, run_checked


logger = logging.getLogger(__name__)

# Files shipped by the base runtime that the application replaces.
_RUNTIME_METADATA_GLOBS = (
    "*.desktop",
    "*.png",
    "*.svg",
    ".DirIcon",
    "AppRun",
    "usr/share/applications/*.desktop",
    "usr/share/metainfo/*.xml",
    "usr/share/icons/hicolor/*/apps/python*",
)


def fetch_runtime_image(cfg: BuildConfig) -> tuple[Path, bool]:
    """Return the base runtime image, downloading it when absent.

    The second element is True when a download happened.
    """

    image = cfg.runtime_image
    if image.exists():
        chmod_x(image)
        return image, False

    if cfg.runtime_image_override is not None:
        raise BuildError(f"Runtime image not found: {image}")

    download(cfg.runtime_url, image)
    chmod_x(image)
    return image, True


def extract_runtime(cfg: BuildConfig) -> Path:
    image = cfg.runtime_image
    if not image.exists():
        raise BuildError(f"No runtime image to extract: {image}")

    work = cfg.work_dir
    work.mkdir(parents=True, exist_ok=True)

    extracted = work / "squashfs-root"
    for stale in (extracted, cfg.appdir):
        if stale.exists():
            shutil.rmtree(stale)

    run_checked([str(image), "--appimage-extract"], cwd=work, env={"APPIMAGE_EXTRACT_AND_RUN": "1"})

    if not extracted.is_dir():
        raise BuildError(f"Extraction did not produce {extracted}")

    extracted.rename(cfg.appdir)
    _strip_runtime_metadata(cfg.appdir)
    return cfg.appdir


def _strip_runtime_metadata(appdir: Path) -> None:
    for pattern in _RUNTIME_METADATA_GLOBS:
        for path in appdir.glob(pattern):
            if path.is_dir() and not path.is_symlink():
                continue
            logger.debug("Removing runtime file %s", path.relative_to(appdir))
            path.unlink()


def bundled_python(cfg: BuildConfig) -> Path:
    python = first_existing(cfg.bundled_python_candidates())
    if python is None:
        tried = ", ".join(str(p) for p in cfg.bundled_python_candidates())
        raise BuildError(f"No bundled interpreter found (tried: {tried})")
    return python


def newest_wheel(cfg: BuildConfig) -> Path:
    wheels = sorted(cfg.wheel_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime) if cfg.wheel_dir.exists() else []
    if not wheels:
        raise BuildError(f"No wheel found in {cfg.wheel_dir}")
    return wheels[-1]


def install_wheel(cfg: BuildConfig, wheel: Path) -> str:
    if not cfg.appdir.is_dir():
        raise BuildError(f"AppDir not found: {cfg.appdir} (run the Extract step first)")

    python = bundled_python(cfg)
    result = run_checked(
        [str(python), "-m", "pip", "install", "--no-warn-script-location", "--upgrade", str(wheel)],
        cwd=cfg.work_dir,
        env={"PYTHONNOUSERSITE": "1", "PIP_DISABLE_PIP_VERSION_CHECK": "1"},
    )
    return result.stdout


def locate_launcher(cfg: BuildConfig) -> Path | None:
    return first_existing(cfg.launcher_candidates())
