from __future__ import annotations


class BuildError(Exception):
    """An expected build artifact is missing or unusable."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class CommandFailed(BuildError):
    """An external tool exited non-zero."""

    def __init__(self, command: str, exit_code: int, *, stdout: str = "", stderr: str = "") -> None:
        super().__init__(f"Command failed with exit code {exit_code}: {command}", exit_code=exit_code)
        self.command = command
        self.stdout = stdout
        self.stderr = stderr
