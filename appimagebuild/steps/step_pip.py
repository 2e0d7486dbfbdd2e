from __future__ import annotations

from ..core.config import BuildConfig
from ..core.errors import BuildError
from ..utils.subproc import RunResult, run


def helper_install_runner(cfg: BuildConfig) -> RunResult:
    if not cfg.venv_python.exists():
        raise BuildError(f"Virtual environment missing: {cfg.venv_path} (run the Venv step first)")

    return run(
        [str(cfg.venv_python), "-m", "pip", "install", cfg.helper_spec],
        cwd=str(cfg.root),
        env_overrides={"PIP_DISABLE_PIP_VERSION_CHECK": "1"},
    )
