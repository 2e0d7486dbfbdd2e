from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Profile:
    name: str
    description: str
    include_steps: list[str]  # by step name


DEFAULT_PROFILE = "recipe"

PROFILES: dict[str, Profile] = {
    "recipe": Profile(
        name="recipe",
        description="Build via python-appimage from the recipe directory",
        include_steps=["Venv", "Helper", "Recipe"],
    ),
    "manual": Profile(
        name="manual",
        description="Build wheel, extract runtime, inject launcher, run appimagetool",
        include_steps=[
            "Venv",
            "Wheel",
            "Runtime",
            "Extract",
            "Install",
            "Launcher",
            "Assets",
            "Package",
        ],
    ),
    "release": Profile(
        name="release",
        description="Manual build plus checksum and smoke test",
        include_steps=[
            "Venv",
            "Wheel",
            "Runtime",
            "Extract",
            "Install",
            "Launcher",
            "Assets",
            "Package",
            "Checksum",
            "Smoke",
        ],
    ),
}
