from __future__ import annotations

from ..core.config import BuildConfig
from ..core.errors import BuildError
from ..utils.subproc import RunResult, run
from .appimage.tools import python_appimage_command


def recipe_build_runner(cfg: BuildConfig) -> RunResult:
    """Build the image with python-appimage from the recipe directory.

    python-appimage writes the image into its working directory, so it runs
    from ``dist/``.
    """

    if not cfg.recipe_path.is_dir():
        raise BuildError(f"Recipe directory not found: {cfg.recipe_path}")

    cfg.dist_dir.mkdir(parents=True, exist_ok=True)
    return run(python_appimage_command(cfg), cwd=str(cfg.dist_dir))
