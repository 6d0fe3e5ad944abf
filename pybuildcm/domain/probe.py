"""Locating the external tools.

Every lookup is an ordered list of probes. A probe returns ``Some(value)``
when it found something and ``Nothing`` otherwise; the first hit wins.
The lists are plain module constants so callers (and tests) can pass their
own.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Callable, TypeVar
import os
import platform
import sys

from returns.io import IOResultE
from returns.maybe import Maybe, Nothing

from pybuildcm.domain.entities import CommandEntity, PackageManager
from pybuildcm.errors import ToolNotFoundError

if TYPE_CHECKING:
    from pybuildcm.domain.context import Context

T = TypeVar("T")

Which = Callable[[str], str | None]
Probe = Callable[["Context"], Maybe[T]]

FORMATTER = "clang-format"
PACKAGE_MANAGER = "vcpkg"
BUILD_GENERATOR = "cmake"
NINJA = "ninja"
VSWHERE = "vswhere"

NINJA_GENERATOR = "Ninja"
VISUAL_STUDIO_GENERATOR = "Visual Studio 17 2022"
VISUAL_STUDIO_VERSION_RANGE = "[17.0,18.0)"


def default_fallbacks() -> dict[str, Path]:
    """Hardcoded install locations tried after the search path."""
    if sys.platform == "win32":
        program_files_x86 = os.environ.get(
            "ProgramFiles(x86)", r"C:\Program Files (x86)"
        )
        return {
            FORMATTER: Path(r"C:\Program Files\LLVM\bin\clang-format.exe"),
            BUILD_GENERATOR: Path(r"C:\Program Files\CMake\bin\cmake.exe"),
            VSWHERE: Path(
                program_files_x86, "Microsoft Visual Studio", "Installer", "vswhere.exe"
            ),
        }
    if sys.platform == "darwin":
        return {FORMATTER: Path("/opt/homebrew/bin/clang-format")}
    return {FORMATTER: Path("/usr/bin/clang-format")}


def default_triplet() -> str:
    machine = platform.machine().lower()
    arch = (
        "arm64"
        if machine in ("arm64", "aarch64")
        else "x86"
        if machine in ("x86", "i386", "i686")
        else "x64"
    )
    system = {"win32": "windows", "darwin": "osx"}.get(sys.platform, "linux")
    return f"{arch}-{system}"


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def on_path(tool: str) -> Probe[Path]:
    def probe(context: "Context") -> Maybe[Path]:
        return Maybe.from_optional(context.which(tool)).map(Path)

    return probe


def at_fallback(tool: str) -> Probe[Path]:
    def probe(context: "Context") -> Maybe[Path]:
        return Maybe.from_optional(context.fallbacks.get(tool)).bind_optional(
            lambda path: path if _is_executable(path) else None
        )

    return probe


def first_found(context: "Context", probes: Iterable[Probe[T]]) -> Maybe[T]:
    for probe in probes:
        found = probe(context)
        if found.value_or(None) is not None:
            return found
    return Nothing


def _required(found: Maybe[T], error: Exception) -> IOResultE[T]:
    return found.map(IOResultE.from_value).value_or(IOResultE.from_failure(error))


FORMATTER_PROBES: tuple[Probe[Path], ...] = (
    on_path(FORMATTER),
    at_fallback(FORMATTER),
)
BUILD_GENERATOR_PROBES: tuple[Probe[Path], ...] = (
    on_path(BUILD_GENERATOR),
    at_fallback(BUILD_GENERATOR),
)
PACKAGE_MANAGER_PROBES: tuple[Probe[Path], ...] = (on_path(PACKAGE_MANAGER),)
VSWHERE_PROBES: tuple[Probe[Path], ...] = (on_path(VSWHERE), at_fallback(VSWHERE))


def find_formatter(
    context: "Context", probes: Iterable[Probe[Path]] = FORMATTER_PROBES
) -> IOResultE[Path]:
    return _required(
        first_found(context, probes),
        ToolNotFoundError(FORMATTER, "Install LLVM or add clang-format to your PATH."),
    )


def find_build_generator(
    context: "Context", probes: Iterable[Probe[Path]] = BUILD_GENERATOR_PROBES
) -> IOResultE[Path]:
    return _required(
        first_found(context, probes),
        ToolNotFoundError(BUILD_GENERATOR, "Install CMake or add it to your PATH."),
    )


def _package_manager(executable: Path) -> PackageManager:
    root = executable.resolve().parent
    return PackageManager(
        executable=executable,
        root=root,
        toolchain_file=root / "scripts" / "buildsystems" / "vcpkg.cmake",
    )


def probe_package_manager(
    context: "Context", probes: Iterable[Probe[Path]] = PACKAGE_MANAGER_PROBES
) -> Maybe[PackageManager]:
    return first_found(context, probes).map(_package_manager)


def find_package_manager(
    context: "Context", probes: Iterable[Probe[Path]] = PACKAGE_MANAGER_PROBES
) -> IOResultE[PackageManager]:
    return _required(
        probe_package_manager(context, probes),
        ToolNotFoundError(
            PACKAGE_MANAGER,
            "Install vcpkg from https://github.com/microsoft/vcpkg and add it to PATH.",
        ),
    )


def generator_override(context: "Context") -> Maybe[str]:
    return Maybe.from_optional(context.config.generator)


def ninja_generator(context: "Context") -> Maybe[str]:
    return on_path(NINJA)(context).map(lambda _: NINJA_GENERATOR)


def _has_visual_studio(context: "Context", vswhere: Path) -> bool:
    try:
        res = context.runner(
            CommandEntity(
                command=(
                    str(vswhere),
                    "-latest",
                    "-products",
                    "*",
                    "-version",
                    VISUAL_STUDIO_VERSION_RANGE,
                    "-property",
                    "installationPath",
                ),
                tag=VSWHERE,
            )
        )
    except OSError:
        return False
    return res.returncode == 0 and bool(res.output.strip())


def visual_studio_generator(context: "Context") -> Maybe[str]:
    return first_found(context, VSWHERE_PROBES).bind_optional(
        lambda vswhere: VISUAL_STUDIO_GENERATOR
        if _has_visual_studio(context, vswhere)
        else None
    )


GENERATOR_PROBES: tuple[Probe[str], ...] = (
    generator_override,
    ninja_generator,
    visual_studio_generator,
)


def select_generator(
    context: "Context", probes: Iterable[Probe[str]] = GENERATOR_PROBES
) -> str | None:
    """Preferred CMake generator, or None to let CMake pick its default."""
    return first_found(context, probes).value_or(None)
