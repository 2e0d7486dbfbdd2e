"""Desktop-integration assets for the AppDir.

The desktop entry, icon and appdata descriptor are looked up in the recipe
directory and copied into the locations appimagetool and desktop
environments expect. Every copy is best-effort: a missing or unreadable
asset is reported and skipped.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from ...core.config import BuildConfig


logger = logging.getLogger(__name__)

_RASTER_ICON_SUFFIXES = (".png", ".ico", ".jpg", ".jpeg", ".bmp", ".gif", ".webp")


@dataclass
class StagingReport:
    copied: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def lines(self) -> list[str]:
        out = [f"copied: {p}" for p in self.copied]
        out += [f"missing (skipped): {p}" for p in self.missing]
        out += [f"failed (skipped): {p}" for p in self.failed]
        return out


def _find(recipe: Path, names: list[str], pattern: str) -> Path | None:
    for name in names:
        p = recipe / name
        if p.is_file():
            return p
    if not recipe.is_dir():
        return None
    matches = sorted(p for p in recipe.glob(pattern) if p.is_file())
    return matches[0] if matches else None


def find_desktop_entry(cfg: BuildConfig) -> Path | None:
    return _find(cfg.recipe_path, [f"{cfg.app_name}.desktop"], "*.desktop")


def find_appdata(cfg: BuildConfig) -> Path | None:
    name = cfg.app_name
    return _find(
        cfg.recipe_path,
        [f"{name}.appdata.xml", f"{name}.metainfo.xml", "application.xml"],
        "*.appdata.xml",
    )


def desktop_icon_name(desktop: Path) -> str | None:
    try:
        lines = desktop.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        return None
    for line in lines:
        key, sep, value = line.partition("=")
        if sep and key.strip() == "Icon" and value.strip():
            return value.strip()
    return None


def find_icon(cfg: BuildConfig, *, hint: str | None = None) -> Path | None:
    candidates: list[str] = []
    for name in dict.fromkeys(n for n in (cfg.app_name, hint) if n):
        candidates += [f"{name}.png", f"{name}.svg"] + [f"{name}{s}" for s in _RASTER_ICON_SUFFIXES[1:]]
    return _find(cfg.recipe_path, candidates, "*.png")


def _copy(src: Path, dst: Path, report: StagingReport) -> bool:
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
    except OSError as exc:
        logger.warning("Could not copy %s -> %s: %s", src, dst, exc)
        report.failed.append(str(dst))
        return False
    report.copied.append(str(dst))
    return True


def retarget_icon(text: str, icon_name: str) -> str:
    """Point every `Icon=` key at *icon_name*, the name the icon is staged under."""

    lines = []
    for line in text.splitlines(keepends=True):
        key = line.split("=", 1)[0].strip()
        if "=" in line and (key == "Icon" or key.startswith("Icon[")):
            ending = "\n" if line.endswith("\n") else ""
            line = f"{key}={icon_name}{ending}"
        lines.append(line)
    return "".join(lines)


def _stage_desktop_entry(src: Path, dst: Path, icon_name: str, report: StagingReport) -> None:
    try:
        text = src.read_text(encoding="utf-8")
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_text(retarget_icon(text, icon_name), encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not stage %s -> %s: %s", src, dst, exc)
        report.failed.append(str(dst))
        return
    report.copied.append(str(dst))


def normalize_icon(src: Path, dst: Path) -> Path:
    """Write *src* to *dst* as a PNG, converting other raster formats."""

    dst.parent.mkdir(parents=True, exist_ok=True)
    if src.suffix.lower() == ".png":
        shutil.copy2(src, dst)
        return dst

    with Image.open(src) as img:
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA")
        img.save(dst, format="PNG")
    return dst


def _stage_icon(cfg: BuildConfig, icon: Path, report: StagingReport) -> None:
    appdir = cfg.appdir
    name = cfg.app_name

    if icon.suffix.lower() == ".svg":
        if _copy(icon, appdir / f"{name}.svg", report):
            _copy(icon, appdir / ".DirIcon", report)
        _copy(icon, appdir / "usr" / "share" / "icons" / "hicolor" / "scalable" / "apps" / f"{name}.svg", report)
        return

    root_icon = appdir / f"{name}.png"
    try:
        normalize_icon(icon, root_icon)
    except (OSError, ValueError) as exc:
        logger.warning("Could not convert icon %s: %s", icon, exc)
        report.failed.append(str(root_icon))
        return
    report.copied.append(str(root_icon))

    _copy(root_icon, appdir / ".DirIcon", report)
    _copy(root_icon, appdir / "usr" / "share" / "icons" / "hicolor" / "256x256" / "apps" / f"{name}.png", report)


def stage_assets(cfg: BuildConfig) -> StagingReport:
    appdir = cfg.appdir
    name = cfg.app_name
    report = StagingReport()

    desktop = find_desktop_entry(cfg)
    if desktop is None:
        logger.warning("No desktop entry in %s", cfg.recipe_path)
        report.missing.append(f"{name}.desktop")
    else:
        for dst in (appdir / f"{name}.desktop", appdir / "usr" / "share" / "applications" / f"{name}.desktop"):
            _stage_desktop_entry(desktop, dst, name, report)

    icon = find_icon(cfg, hint=desktop_icon_name(desktop) if desktop is not None else None)
    if icon is None:
        logger.warning("No icon in %s", cfg.recipe_path)
        report.missing.append(f"{name}.png")
    else:
        _stage_icon(cfg, icon, report)

    appdata = find_appdata(cfg)
    if appdata is None:
        logger.warning("No appdata descriptor in %s", cfg.recipe_path)
        report.missing.append(f"{name}.appdata.xml")
    else:
        _copy(appdata, appdir / "usr" / "share" / "metainfo" / f"{name}.appdata.xml", report)

    return report
