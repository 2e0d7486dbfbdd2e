"""AppImage build helpers.

Focused helper modules used by the AppImage build steps. Public helpers are
re-exported here so callers can import from `appimagebuild.steps.appimage`.
"""

from .apprun import render_apprun, write_apprun
from .assets import StagingReport, normalize_icon, stage_assets
from .common import chmod_x, download, first_existing, run_checked, sha256_file, write_text
from .python_runtime import (
    bundled_python,
    extract_runtime,
    fetch_runtime_image,
    install_wheel,
    locate_launcher,
    newest_wheel,
)
from .tools import appimagetool_command, python_appimage_command, resolve_appimagetool

__all__ = [
    "StagingReport",
    "appimagetool_command",
    "bundled_python",
    "chmod_x",
    "download",
    "extract_runtime",
    "fetch_runtime_image",
    "first_existing",
    "install_wheel",
    "locate_launcher",
    "newest_wheel",
    "normalize_icon",
    "python_appimage_command",
    "render_apprun",
    "resolve_appimagetool",
    "run_checked",
    "sha256_file",
    "stage_assets",
    "write_apprun",
    "write_text",
]
