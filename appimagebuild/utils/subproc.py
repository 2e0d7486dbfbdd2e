from __future__ import annotations

import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import Iterable, Mapping


@dataclass(frozen=True)
class RunResult:
    command_str: str
    stdout: str
    stderr: str
    exit_code: int


def command_str(args: Iterable[str]) -> str:
    return " ".join(shlex.quote(str(p)) for p in args)


def run(
    args: list[str],
    *,
    cwd: str,
    env_overrides: Mapping[str, str] | None = None,
) -> RunResult:
    env = {**os.environ, **(env_overrides or {})}

    proc = subprocess.run(
        args,
        cwd=cwd,
        text=True,
        capture_output=True,
        env=env,
    )

    return RunResult(
        command_str=command_str(args),
        stdout=proc.stdout,
        stderr=proc.stderr,
        exit_code=proc.returncode,
    )


def report(command: str, lines: Iterable[str], *, exit_code: int = 0) -> RunResult:
    """Build a RunResult for a step that ran in-process."""

    text = "\n".join(lines)
    return RunResult(
        command_str=command,
        stdout=text + "\n" if text else "",
        stderr="",
        exit_code=exit_code,
    )


def python_exe() -> str:
    return sys.executable
