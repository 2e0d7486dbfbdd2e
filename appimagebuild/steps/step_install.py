from __future__ import annotations

import logging

from ..core.config import BuildConfig
from ..utils.subproc import RunResult, report
from .appimage.python_runtime import install_wheel, locate_launcher, newest_wheel


logger = logging.getLogger(__name__)


def install_runner(cfg: BuildConfig) -> RunResult:
    wheel = newest_wheel(cfg)
    pip_output = install_wheel(cfg, wheel)

    lines = [pip_output.rstrip(), f"Installed {wheel.name} into {cfg.appdir}"]

    launcher = locate_launcher(cfg)
    if launcher is None:
        tried = ", ".join(str(p.relative_to(cfg.appdir)) for p in cfg.launcher_candidates())
        # AppRun falls back to `python -m <module>`.
        logger.warning("No console-script launcher %r found (tried: %s)", cfg.entry_point, tried)
        lines.append(f"warning: no launcher found (tried: {tried}); AppRun will use -m {cfg.module}")
    else:
        lines.append(f"Launcher: {launcher.relative_to(cfg.appdir)}")

    return report(f"pip install {wheel.name}", [line for line in lines if line])
