"""Errors reported by pybuildcm.

Handlers return them inside an ``IOFailure`` instead of raising, so a
composite action stops at the first one and ``main`` decides the exit code.
"""

from collections.abc import Iterable
from pathlib import Path

from pybuildcm.types import Cmd


class PybuildcmError(Exception):
    """Base class for every error the tool reports to the user."""


class UsageError(PybuildcmError):
    """Conflicting, unknown or malformed command-line switches."""


class ConfigError(PybuildcmError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid configuration '{path}': {reason}")


class PrerequisiteError(PybuildcmError):
    def __init__(self, message: str, hint: str | None = None) -> None:
        self.hint = hint
        super().__init__(f"{message}\n    {hint}" if hint else message)


class ToolNotFoundError(PrerequisiteError):
    def __init__(self, tool: str, hint: str | None = None) -> None:
        self.tool = tool
        super().__init__(f"'{tool}' was not found", hint)


class ProcessError(PybuildcmError):
    def __init__(self, command: Cmd, returncode: int, output: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"'{Path(command[0]).name}' exited with code {returncode}: "
            f"'{' '.join(command)}'"
        )


class FormatCheckError(PybuildcmError):
    def __init__(self, files: Iterable[Path]) -> None:
        self.files = tuple(files)
        listing = "".join(f"\n    {file}" for file in self.files)
        super().__init__(
            f"{len(self.files)} file(s) need formatting:{listing}\n"
            "    Run with -Format to fix them."
        )
