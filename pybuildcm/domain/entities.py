from dataclasses import dataclass
from pathlib import Path

from pybuildcm.types import Cmd


@dataclass(frozen=True)
class CommandEntity:
    command: Cmd
    tag: str


@dataclass(frozen=True)
class ProcessResult:
    command: Cmd
    returncode: int
    output: str = ""


@dataclass(frozen=True)
class PackageManager:
    executable: Path
    root: Path
    toolchain_file: Path


@dataclass(frozen=True)
class FormatSummary:
    formatted: tuple[Path, ...]
    failed: tuple[Path, ...]
