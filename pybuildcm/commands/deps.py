from returns.io import IOResultE

from pybuildcm import report
from pybuildcm.domain.context import Context
from pybuildcm.domain.entities import CommandEntity, PackageManager, ProcessResult
from pybuildcm.domain.probe import (
    PACKAGE_MANAGER,
    default_triplet,
    find_package_manager,
)
from pybuildcm.domain.services import execute, working_directory
from pybuildcm.errors import PrerequisiteError


def _installed(res: ProcessResult) -> ProcessResult:
    report.success("Dependencies installed")
    return res


def _install(context: Context, vcpkg: PackageManager) -> IOResultE[ProcessResult]:
    config = context.config
    if not config.manifest.is_file():
        return IOResultE.from_failure(
            PrerequisiteError(
                f"Manifest '{config.manifest}' not found",
                "Create a vcpkg.json next to CMakeLists.txt to declare dependencies.",
            )
        )

    triplet = config.triplet or default_triplet()
    report.info(f"Installing dependencies with vcpkg ({vcpkg.root}) for {triplet}")
    # vcpkg resolves the manifest relative to where it is started
    with working_directory(config.project):
        return execute(
            context.runner,
            CommandEntity(
                command=(
                    str(vcpkg.executable),
                    "install",
                    "--recurse",
                    "--triplet",
                    triplet,
                ),
                tag=PACKAGE_MANAGER,
            ),
            config.verbose,
        ).map(_installed)


def install_dependencies(context: Context) -> IOResultE[ProcessResult]:
    return find_package_manager(context).bind(lambda vcpkg: _install(context, vcpkg))
