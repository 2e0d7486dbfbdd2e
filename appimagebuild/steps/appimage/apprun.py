from __future__ import annotations

import shlex
from pathlib import Path

from ...core.config import BuildConfig

from .common import chmod_x, write_text


def _rel(path: Path, appdir: Path) -> str:
    return path.relative_to(appdir).as_posix()


def render_apprun(cfg: BuildConfig, *, launcher: Path | None = None) -> str:
    """Render the AppRun script for the AppDir.

    Order at runtime: console-script launcher, then ``python -m <module>``
    with the bundled interpreter, then a diagnostic and exit 1. The
    interpreter is looked up at every location the Install step accepts.
    """

    appdir = cfg.appdir
    pythons = " ".join(f'"$HERE/{_rel(p, appdir)}"' for p in cfg.bundled_python_candidates(appdir))
    launcher_rel = _rel(launcher or cfg.launcher_candidates(appdir)[0], appdir)
    home_rel = f"opt/{cfg.python_tag}"
    module = shlex.quote(cfg.module)
    name = cfg.app_name

    return "\n".join(
        [
            "#!/bin/sh",
            'HERE="$(dirname "$(readlink -f "$0")")"',
            'export APPDIR="${APPDIR:-$HERE}"',
            f'if [ -d "$HERE/{home_rel}" ]; then',
            f'    export PYTHONHOME="$HERE/{home_rel}"',
            "fi",
            'export PYTHONNOUSERSITE="1"',
            f'export PATH="$HERE/usr/bin:$HERE/{home_rel}/bin${{PATH:+:$PATH}}"',
            'PYTHON=""',
            f"for candidate in {pythons}; do",
            '    if [ -x "$candidate" ]; then',
            '        PYTHON="$candidate"',
            "        break",
            "    fi",
            "done",
            f'LAUNCHER="$HERE/{launcher_rel}"',
            'if [ -f "$LAUNCHER" ]; then',
            '    if [ -n "$PYTHON" ]; then',
            '        exec "$PYTHON" "$LAUNCHER" "$@"',
            "    fi",
            '    exec "$LAUNCHER" "$@"',
            "fi",
            'if [ -n "$PYTHON" ]; then',
            f'    exec "$PYTHON" -m {module} "$@"',
            "fi",
            f'echo "{name}: no launcher at $LAUNCHER and no bundled interpreter under $HERE" >&2',
            "exit 1",
            "",
        ]
    )


def write_apprun(cfg: BuildConfig, *, launcher: Path | None = None) -> Path:
    path = cfg.appdir / "AppRun"
    if path.is_symlink():
        path.unlink()
    write_text(path, render_apprun(cfg, launcher=launcher))
    chmod_x(path)
    return path
