"""Build configuration.

Every tunable comes from an ``OSCR_*`` environment variable with a default;
CLI flags are applied on top via ``dataclasses.replace``. All artifact paths
are derived from the config so any step can run on its own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


DEFAULT_RUNTIME_URL = (
    "https://github.com/niess/python-appimage/releases/download/python3.13/"
    "python3.13.2-cp313-cp313-manylinux2014_x86_64.AppImage"
)

DEFAULT_APPIMAGETOOL_URL = (
    "https://github.com/AppImage/AppImageKit/releases/download/continuous/"
    "appimagetool-x86_64.AppImage"
)


def env_flag(name: str) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    return raw in {"1", "true", "yes", "y", "on"}


def _env(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(name, "").strip()
    return raw or default


def _optional_path(raw: str) -> Path | None:
    return Path(raw) if raw else None


@dataclass(frozen=True)
class BuildConfig:
    root: Path
    app_name: str = "OSCR"
    app_version: str = ""
    python_version: str = "3.13"
    entry_point: str = "oscr"
    module: str = "OSCR"
    venv_dir: Path = Path(".venv")
    recipe_dir: Path = Path("AppImage")
    helper_spec: str = "python-appimage"
    runtime_url: str = DEFAULT_RUNTIME_URL
    runtime_image_override: Path | None = None
    appimagetool_override: Path | None = None
    appimagetool_url: str = DEFAULT_APPIMAGETOOL_URL
    arch: str = "x86_64"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BuildConfig":
        env = os.environ if environ is None else environ
        root_raw = env.get("OSCR_BUILD_ROOT", "").strip()
        root = Path(root_raw).resolve() if root_raw else Path.cwd().resolve()

        return cls(
            root=root,
            app_name=_env(env, "OSCR_APP_NAME", "OSCR"),
            app_version=env.get("OSCR_APP_VERSION", "").strip(),
            python_version=_env(env, "OSCR_PYTHON_VERSION", "3.13"),
            entry_point=_env(env, "OSCR_ENTRY_POINT", "oscr"),
            module=_env(env, "OSCR_MODULE", "OSCR"),
            venv_dir=Path(_env(env, "OSCR_VENV_DIR", ".venv")),
            recipe_dir=Path(_env(env, "OSCR_RECIPE_DIR", "AppImage")),
            helper_spec=_env(env, "OSCR_HELPER_SPEC", "python-appimage"),
            runtime_url=_env(env, "OSCR_RUNTIME_URL", DEFAULT_RUNTIME_URL),
            runtime_image_override=_optional_path(env.get("OSCR_RUNTIME_IMAGE", "").strip()),
            appimagetool_override=_optional_path(env.get("OSCR_APPIMAGETOOL", "").strip()),
            appimagetool_url=_env(env, "OSCR_APPIMAGETOOL_URL", DEFAULT_APPIMAGETOOL_URL),
            arch=_env(env, "OSCR_ARCH", "x86_64"),
        )

    def _under_root(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root / path

    # Layout

    @property
    def venv_path(self) -> Path:
        return self._under_root(self.venv_dir)

    @property
    def venv_python(self) -> Path:
        return self.venv_path / "bin" / "python"

    @property
    def recipe_path(self) -> Path:
        return self._under_root(self.recipe_dir)

    @property
    def dist_dir(self) -> Path:
        return self.root / "dist"

    @property
    def wheel_dir(self) -> Path:
        return self.dist_dir / "wheels"

    @property
    def work_dir(self) -> Path:
        return self.dist_dir / "appimage"

    @property
    def tools_dir(self) -> Path:
        return self.dist_dir / "tools"

    @property
    def appdir(self) -> Path:
        return self.work_dir / f"{self.app_name}.AppDir"

    @property
    def runtime_image(self) -> Path:
        if self.runtime_image_override is not None:
            return self._under_root(self.runtime_image_override)
        name = self.runtime_url.rstrip("/").rsplit("/", 1)[-1] or "python-runtime.AppImage"
        return self.work_dir / name

    @property
    def output_image(self) -> Path:
        parts = [self.app_name]
        if self.app_version:
            parts.append(self.app_version)
        parts.append(self.arch)
        return self.dist_dir / ("-".join(parts) + ".AppImage")

    # Bundled runtime layout (python-appimage manylinux images)

    @property
    def python_tag(self) -> str:
        return f"python{self.python_version}"

    def bundled_python_candidates(self, appdir: Path | None = None) -> list[Path]:
        base = appdir or self.appdir
        return [
            base / "opt" / self.python_tag / "bin" / self.python_tag,
            base / "usr" / "bin" / self.python_tag,
        ]

    def launcher_candidates(self, appdir: Path | None = None) -> list[Path]:
        base = appdir or self.appdir
        return [
            base / "opt" / self.python_tag / "bin" / self.entry_point,
            base / "usr" / "bin" / self.entry_point,
        ]
