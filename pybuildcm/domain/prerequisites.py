from returns.io import IOResultE

from pybuildcm.config import Config
from pybuildcm.errors import PrerequisiteError

ROOT_MARKER = "CMakeLists.txt"

_HINT = "Run pybuildcm from the project root or pass -Dir <project root>."


def check_prerequisites(config: Config) -> IOResultE[Config]:
    if not (config.project / ROOT_MARKER).is_file():
        return IOResultE.from_failure(
            PrerequisiteError(f"{ROOT_MARKER} not found in '{config.project}'", _HINT)
        )
    if not config.src.is_dir():
        return IOResultE.from_failure(
            PrerequisiteError(f"Source directory '{config.src}' not found", _HINT)
        )
    return IOResultE.from_value(config)
