from pathlib import Path
import sys
import sysconfig

from returns.io import IOResultE

from pybuildcm import report
from pybuildcm.commands.clean import clean
from pybuildcm.commands.generate import generate
from pybuildcm.config import Config
from pybuildcm.domain.context import Context
from pybuildcm.domain.entities import CommandEntity
from pybuildcm.domain.probe import BUILD_GENERATOR, find_build_generator
from pybuildcm.domain.services import execute


def exe_name(name: str) -> str:
    suffix = sysconfig.get_config_var("EXE_SUFFIX") or (
        ".exe" if sys.platform == "win32" else ""
    )
    return f"{name}{suffix}"


def executable_candidates(config: Config) -> tuple[Path, ...]:
    name = exe_name(config.name)
    return (
        config.build / name,
        config.build / config.mode / name,
        config.build / "bin" / name,
        config.build / "bin" / config.mode / name,
    )


def find_executable(config: Config) -> Path | None:
    return next(
        (file for file in executable_candidates(config) if file.is_file()), None
    )


def _report_executable(config: Config) -> Path | None:
    exe = find_executable(config)
    if exe:
        report.success(f"Build succeeded: {exe}")
    else:
        report.warning(
            f"Build succeeded but executable '{exe_name(config.name)}' was not found"
        )
    return exe


def _ensure_generated(context: Context) -> IOResultE[object]:
    if context.config.cmake_cache.exists():
        return IOResultE.from_value(context.config.cmake_cache)
    report.info("No generated build files found, generating first")
    return generate(context)


def build(context: Context) -> IOResultE[Path | None]:
    config = context.config

    def run_build(cmake: Path):
        report.info(f"Building {config.name} ({config.mode})")
        return execute(
            context.runner,
            CommandEntity(
                command=(
                    str(cmake),
                    "--build",
                    str(config.build),
                    "--config",
                    config.mode,
                ),
                tag=BUILD_GENERATOR,
            ),
            config.verbose,
        )

    return (
        _ensure_generated(context)
        .bind(lambda _: find_build_generator(context))
        .bind(run_build)
        .map(lambda _: _report_executable(config))
    )


def rebuild(context: Context) -> IOResultE[Path | None]:
    return clean(context).bind(lambda _: build(context))
