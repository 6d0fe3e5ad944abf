from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import toml
from returns.io import IOResultE, impure_safe

from pybuildcm.errors import ConfigError
from pybuildcm.types import Mode

CONFIG_FILE = "pybuildcm.toml"

DEFAULT_BUILD_DIR = "build"
DEFAULT_SRC_DIR = "src"
DEFAULT_INCLUDE_DIR = "include"
DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".c",
    ".cc",
    ".cpp",
    ".cxx",
    ".h",
    ".hh",
    ".hpp",
    ".hxx",
)

_PROJECT_KEYS = {
    "name",
    "build_dir",
    "src_dir",
    "include_dir",
    "extensions",
    "generator",
    "triplet",
}


class _ConfigArgs(Protocol):
    dir: Path
    mode: Mode
    generator: str | None
    verbose: bool


@dataclass(frozen=True)
class Config:
    name: str
    project: Path
    build: Path
    src: Path
    include: Path
    extensions: tuple[str, ...]
    mode: Mode = "Release"
    generator: str | None = None
    triplet: str | None = None
    verbose: bool = False

    @property
    def cmake_cache(self) -> Path:
        return self.build / "CMakeCache.txt"

    @property
    def manifest(self) -> Path:
        return self.project / "vcpkg.json"


@impure_safe
def load_config_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return dict()
    return toml.loads(config_path.read_text())


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def _project_table(config_path: Path, file: dict[str, Any]) -> dict[str, Any]:
    project = file.get("project", dict())
    if not isinstance(project, dict):
        raise ConfigError(config_path, "'project' must be a table")
    unknown = set(project) - _PROJECT_KEYS
    if unknown:
        raise ConfigError(config_path, f"unknown key(s): {', '.join(sorted(unknown))}")
    for key, value in project.items():
        if key == "extensions":
            if not isinstance(value, list) or not all(
                isinstance(v, str) for v in value
            ):
                raise ConfigError(config_path, "'extensions' must be a list of strings")
        elif not isinstance(value, str):
            raise ConfigError(config_path, f"'{key}' must be a string")
    return project


def _check_build_dir(config_path: Path, build: Path, *owned: Path) -> Path:
    """The build directory is removed by clean, so it must not hold project files."""
    resolved = build.resolve()
    for path in owned:
        if path.resolve().is_relative_to(resolved):
            raise ConfigError(
                config_path, f"build directory '{build}' would contain '{path}'"
            )
    return build


def create_config(args: _ConfigArgs, file: dict[str, Any]) -> Config:
    directory = Path(args.dir).absolute()
    config_path = directory / CONFIG_FILE
    project = _project_table(config_path, file)
    src = directory / project.get("src_dir", DEFAULT_SRC_DIR)
    include = directory / project.get("include_dir", DEFAULT_INCLUDE_DIR)
    build = _check_build_dir(
        config_path,
        directory / project.get("build_dir", DEFAULT_BUILD_DIR),
        directory,
        src,
        include,
    )
    return Config(
        name=project.get("name", directory.name),
        project=directory,
        build=build,
        src=src,
        include=include,
        extensions=tuple(
            dict.fromkeys(
                map(_normalize_extension, project.get("extensions", DEFAULT_EXTENSIONS))
            )
        ),
        mode=args.mode,
        # the command line wins over the file
        generator=(
            args.generator if args.generator is not None else project.get("generator")
        ),
        triplet=project.get("triplet"),
        verbose=args.verbose,
    )


def config_load(args: _ConfigArgs) -> IOResultE[Config]:
    config_path = Path(args.dir).absolute() / CONFIG_FILE
    return (
        load_config_file(config_path)
        .alt(
            lambda e: e
            if isinstance(e, ConfigError)
            else ConfigError(config_path, str(e))
        )
        .bind(impure_safe(lambda file: create_config(args, file)))
    )
