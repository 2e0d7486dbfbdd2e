#!/usr/bin/env python3
"""OSCR AppImage build runner.

Usage:
  python3 scripts/build/oscr-build.py                   # python-appimage recipe build
  python3 scripts/build/oscr-build.py --profile=manual  # wheel + runtime + appimagetool
  python3 scripts/build/oscr-build.py --run-steps=wheel,install
  python3 scripts/build/oscr-build.py --list-steps
"""

from __future__ import annotations

import sys
from pathlib import Path


TOOL_ROOT = Path(__file__).resolve().parents[2]
if str(TOOL_ROOT) not in sys.path:
    sys.path.insert(0, str(TOOL_ROOT))

from appimagebuild.core.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
