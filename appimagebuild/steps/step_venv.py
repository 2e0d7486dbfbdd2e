from __future__ import annotations

import logging

from ..core.config import BuildConfig
from ..utils.subproc import RunResult, python_exe, report
from .appimage.common import run_checked


logger = logging.getLogger(__name__)


def venv_runner(cfg: BuildConfig) -> RunResult:
    venv = cfg.venv_path
    if cfg.venv_python.exists():
        logger.debug("Reusing virtual environment %s", venv)
        return report("venv", [f"Virtual environment already present: {venv}"])

    cfg.root.mkdir(parents=True, exist_ok=True)
    return run_checked([python_exe(), "-m", "venv", str(venv)], cwd=cfg.root)
