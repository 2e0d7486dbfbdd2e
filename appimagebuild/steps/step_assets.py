from __future__ import annotations

from ..core.config import BuildConfig
from ..core.errors import BuildError
from ..utils.subproc import RunResult, report
from .appimage.assets import stage_assets


def assets_runner(cfg: BuildConfig) -> RunResult:
    if not cfg.appdir.is_dir():
        raise BuildError(f"AppDir not found: {cfg.appdir} (run the Extract step first)")

    staged = stage_assets(cfg)
    return report(f"stage assets from {cfg.recipe_path}", staged.lines() or ["Nothing to stage"])
