from __future__ import annotations

import hashlib
import logging
import shutil
import stat
import urllib.request
from pathlib import Path

from ...core.errors import BuildError, CommandFailed
from ...utils.subproc import RunResult, run


logger = logging.getLogger(__name__)


def download(url: str, dst: Path) -> None:
    dst.parent.mkdir(parents=True, exist_ok=True)
    part = dst.with_name(dst.name + ".part")

    logger.info("Downloading %s -> %s", url, dst)
    try:
        with urllib.request.urlopen(url) as resp, part.open("wb") as f:
            shutil.copyfileobj(resp, f)
    except OSError as exc:
        # URLError and HTTPError are OSError subclasses.
        part.unlink(missing_ok=True)
        raise BuildError(f"Download failed: {url}: {exc}") from exc
    part.replace(dst)


def chmod_x(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


def run_checked(args: list[str], *, cwd: Path, env: dict[str, str] | None = None) -> RunResult:
    result = run([str(a) for a in args], cwd=str(cwd), env_overrides=env)
    if result.exit_code != 0:
        raise CommandFailed(
            result.command_str,
            result.exit_code,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return result


def first_existing(candidates: list[Path]) -> Path | None:
    return next((p for p in candidates if p.exists()), None)
