from pathlib import Path
import shutil

from returns.io import IOResultE, impure_safe

from pybuildcm import report
from pybuildcm.domain.context import Context


def _removed(build: Path) -> Path:
    report.success(f"Removed {build}")
    return build


def clean(context: Context) -> IOResultE[Path]:
    build = context.config.build
    if not build.exists():
        report.info(f"Nothing to clean, '{build}' does not exist")
        return IOResultE.from_value(build)

    report.info(f"Removing {build}")
    return impure_safe(shutil.rmtree)(build).map(lambda _: _removed(build))
