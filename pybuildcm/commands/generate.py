from pathlib import Path

from returns.io import IOResultE, impure_safe

from pybuildcm import report
from pybuildcm.domain.context import Context
from pybuildcm.domain.entities import CommandEntity, ProcessResult
from pybuildcm.domain.probe import (
    BUILD_GENERATOR,
    find_build_generator,
    probe_package_manager,
    select_generator,
)
from pybuildcm.domain.services import execute, working_directory
from pybuildcm.types import Cmd


def _toolchain_file(context: Context) -> Path | None:
    vcpkg = probe_package_manager(context).value_or(None)
    if vcpkg is None:
        report.warning("vcpkg not found, configuring without its toolchain file")
        return None
    if not vcpkg.toolchain_file.is_file():
        report.warning(f"vcpkg toolchain file '{vcpkg.toolchain_file}' does not exist")
        return None
    return vcpkg.toolchain_file


def generate_command(
    cmake: Path, context: Context, toolchain: Path | None, generator: str | None
) -> Cmd:
    config = context.config
    return (
        str(cmake),
        str(config.project),
        f"-DCMAKE_BUILD_TYPE={config.mode}",
        *((f"-DCMAKE_TOOLCHAIN_FILE={toolchain}",) if toolchain else ()),
        *(("-G", generator) if generator is not None else ()),
    )


def _configure(context: Context, cmake: Path) -> IOResultE[ProcessResult]:
    config = context.config
    generator = select_generator(context)
    report.info(
        f"Generating build files with '{generator}'"
        if generator
        else "Generating build files with the default generator"
    )
    toolchain = _toolchain_file(context)

    with working_directory(config.build):
        return execute(
            context.runner,
            CommandEntity(
                command=generate_command(cmake, context, toolchain, generator),
                tag=BUILD_GENERATOR,
            ),
            config.verbose,
        ).map(_generated)


def _generated(res: ProcessResult) -> ProcessResult:
    report.success("Build files generated")
    return res


def generate(context: Context) -> IOResultE[ProcessResult]:
    build = context.config.build
    return (
        find_build_generator(context)
        .bind(
            lambda cmake: impure_safe(build.mkdir)(parents=True, exist_ok=True).map(
                lambda _: cmake
            )
        )
        .bind(lambda cmake: _configure(context, cmake))
    )
