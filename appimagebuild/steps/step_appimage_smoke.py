from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from ..core.config import BuildConfig, env_flag
from ..utils.subproc import RunResult, report, run


def appimage_smoke_runner(cfg: BuildConfig) -> RunResult:
    """Smoke-test the built AppImage.

    Extracts the image and imports the application module with the bundled
    interpreter, which catches a wheel that never made it into the runtime.
    Running the app itself would open its window.
    """

    appimage = cfg.output_image

    if env_flag("OSCR_SKIP_APPIMAGE_SMOKE"):
        return report("appimage-smoke", ["Skipping AppImage smoke test (OSCR_SKIP_APPIMAGE_SMOKE)."])

    if not appimage.exists():
        return RunResult(
            command_str="appimage-smoke",
            stdout="",
            stderr=f"AppImage not found: {appimage}\n",
            exit_code=2,
        )

    with tempfile.TemporaryDirectory(prefix="oscr-smoke-") as tmp:
        work = Path(tmp)
        copy = work / appimage.name
        shutil.copy2(appimage, copy)
        copy.chmod(0o755)

        extracted = run([str(copy), "--appimage-extract"], cwd=str(work), env_overrides={"APPIMAGE_EXTRACT_AND_RUN": "1"})
        if extracted.exit_code != 0:
            return extracted

        root = work / "squashfs-root"
        python = next((p for p in cfg.bundled_python_candidates(root) if p.exists()), None)
        if python is None:
            return RunResult(
                command_str="appimage-smoke",
                stdout="",
                stderr=f"No bundled interpreter inside {appimage.name}\n",
                exit_code=1,
            )

        return run(
            [str(python), "-c", f"import {cfg.module}; print('appimage-smoke-ok')"],
            cwd=str(work),
            env_overrides={
                "PYTHONHOME": str(root / "opt" / cfg.python_tag),
                "PYTHONNOUSERSITE": "1",
            },
        )
