from __future__ import annotations

from ..core.config import BuildConfig
from ..utils.subproc import RunResult, report
from .appimage.python_runtime import extract_runtime, fetch_runtime_image


def runtime_fetch_runner(cfg: BuildConfig) -> RunResult:
    image, downloaded = fetch_runtime_image(cfg)
    if downloaded:
        return report(f"download {cfg.runtime_url}", [f"Downloaded runtime image: {image}"])
    return report("runtime", [f"Using runtime image: {image}"])


def extract_runner(cfg: BuildConfig) -> RunResult:
    appdir = extract_runtime(cfg)
    return report(
        f"{cfg.runtime_image} --appimage-extract",
        [f"Extracted runtime into {appdir}"],
    )
