from __future__ import annotations

import logging

from ..core.config import BuildConfig
from ..core.errors import BuildError
from ..utils.subproc import RunResult, report
from .appimage.common import run_checked, sha256_file, write_text
from .appimage.tools import appimagetool_command, resolve_appimagetool


logger = logging.getLogger(__name__)


def package_runner(cfg: BuildConfig) -> RunResult:
    appdir = cfg.appdir
    out = cfg.output_image

    if not appdir.is_dir():
        raise BuildError(f"AppDir not found: {appdir}")
    if not (appdir / "AppRun").exists():
        raise BuildError(f"AppDir has no AppRun: {appdir} (run the Launcher step first)")

    tool = resolve_appimagetool(cfg)

    if out.exists():
        out.unlink()
    out.parent.mkdir(parents=True, exist_ok=True)

    result = run_checked(
        appimagetool_command(tool, appdir, out),
        cwd=cfg.root,
        env={"APPIMAGE_EXTRACT_AND_RUN": "1", "ARCH": cfg.arch},
    )

    if not out.exists():
        raise BuildError(f"AppImage build did not produce: {out}")

    logger.info("Built AppImage: %s", out)
    return RunResult(
        command_str=result.command_str,
        stdout=f"{result.stdout.rstrip()}\nBuilt AppImage: {out}\n".lstrip("\n"),
        stderr=result.stderr,
        exit_code=0,
    )


def checksum_runner(cfg: BuildConfig) -> RunResult:
    out = cfg.output_image
    if not out.exists():
        raise BuildError(f"AppImage not found: {out}")

    digest = sha256_file(out)
    sidecar = out.with_name(out.name + ".sha256")
    # sha256sum format, so `sha256sum -c` works next to the image.
    write_text(sidecar, f"{digest}  {out.name}\n")
    return report(f"sha256 {out.name}", [f"{digest}  {out.name}", f"Wrote {sidecar}"])
