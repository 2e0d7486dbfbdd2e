from __future__ import annotations

from pathlib import Path

from ..core.config import BuildConfig
from ..core.model import Step
from ..utils.paths import buildlog_dir
from .step_appimage import checksum_runner, package_runner
from .step_appimage_smoke import appimage_smoke_runner
from .step_assets import assets_runner
from .step_install import install_runner
from .step_launcher import launcher_runner
from .step_pip import helper_install_runner
from .step_recipe import recipe_build_runner
from .step_runtime import extract_runner, runtime_fetch_runner
from .step_venv import venv_runner
from .step_wheel import wheel_runner


def steps(cfg: BuildConfig) -> list[Step]:
    logs = buildlog_dir(cfg.root)

    def _log(number: int, slug: str) -> Path:
        return logs / f"step-{number:02d}-{slug}.log"

    return [
        Step(1, "Venv", "Create the build virtual environment (skipped if present)", _log(1, "venv"), venv_runner),
        Step(2, "Helper", "Install the python-appimage packaging helper", _log(2, "helper"), helper_install_runner),
        Step(3, "Recipe", "Build the AppImage with python-appimage", _log(3, "recipe"), recipe_build_runner),
        Step(4, "Wheel", "Build the application wheel", _log(4, "wheel"), wheel_runner, fatal=True),
        Step(5, "Runtime", "Fetch the base Python runtime image", _log(5, "runtime"), runtime_fetch_runner, fatal=True),
        Step(6, "Extract", "Extract the runtime image into the AppDir", _log(6, "extract"), extract_runner, fatal=True),
        Step(7, "Install", "Install the wheel into the bundled runtime", _log(7, "install"), install_runner, fatal=True),
        Step(8, "Launcher", "Write the AppRun launcher", _log(8, "launcher"), launcher_runner),
        Step(9, "Assets", "Stage desktop entry, icon and appdata", _log(9, "assets"), assets_runner),
        Step(10, "Package", "Build the AppImage with appimagetool", _log(10, "package"), package_runner),
        Step(11, "Checksum", "Write the SHA-256 sidecar for the AppImage", _log(11, "checksum"), checksum_runner),
        Step(12, "Smoke", "Import the app with the bundled interpreter", _log(12, "smoke"), appimage_smoke_runner),
    ]
