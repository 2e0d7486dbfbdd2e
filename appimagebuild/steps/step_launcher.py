from __future__ import annotations

from ..core.config import BuildConfig
from ..core.errors import BuildError
from ..utils.subproc import RunResult, report
from .appimage.apprun import write_apprun
from .appimage.python_runtime import locate_launcher


def launcher_runner(cfg: BuildConfig) -> RunResult:
    if not cfg.appdir.is_dir():
        raise BuildError(f"AppDir not found: {cfg.appdir} (run the Extract step first)")

    launcher = locate_launcher(cfg)
    path = write_apprun(cfg, launcher=launcher)
    target = launcher.relative_to(cfg.appdir) if launcher else f"-m {cfg.module}"
    return report("write AppRun", [f"Wrote {path} (primary: {target})"])
