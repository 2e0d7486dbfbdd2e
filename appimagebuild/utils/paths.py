from __future__ import annotations

import os
from pathlib import Path


def repo_root() -> Path:
    """Return the project directory the build operates on.

    Priority:
    - OSCR_BUILD_ROOT
    - the current working directory (the OSCR checkout being packaged)
    """

    p = os.environ.get("OSCR_BUILD_ROOT")
    if p:
        return Path(p).resolve()
    return Path.cwd().resolve()


def buildlog_dir(root: Path | None = None) -> Path:
    return (root or repo_root()) / "buildlog" / "oscr"
