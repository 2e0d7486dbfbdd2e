from __future__ import annotations

import shutil

from ..core.config import BuildConfig
from ..core.errors import BuildError
from ..utils.subproc import RunResult, python_exe
from .appimage.common import run_checked


def wheel_runner(cfg: BuildConfig) -> RunResult:
    wheel_dir = cfg.wheel_dir
    if wheel_dir.exists():
        shutil.rmtree(wheel_dir)
    wheel_dir.mkdir(parents=True)

    python = str(cfg.venv_python) if cfg.venv_python.exists() else python_exe()
    result = run_checked(
        [python, "-m", "pip", "wheel", "--no-deps", "-w", str(wheel_dir), str(cfg.root)],
        cwd=cfg.root,
        env={"PIP_DISABLE_PIP_VERSION_CHECK": "1"},
    )

    wheels = sorted(wheel_dir.glob("*.whl"))
    if not wheels:
        raise BuildError(f"No wheel produced in {wheel_dir}")

    names = "\n".join(f"Built wheel: {w.name}" for w in wheels)
    return RunResult(
        command_str=result.command_str,
        stdout=f"{result.stdout.rstrip()}\n{names}\n".lstrip("\n"),
        stderr=result.stderr,
        exit_code=0,
    )
