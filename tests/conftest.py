from collections.abc import Callable
from functools import partial
from pathlib import Path

import pytest

from pybuildcm.config import DEFAULT_EXTENSIONS, Config
from pybuildcm.domain.context import Context
from pybuildcm.domain.entities import CommandEntity, ProcessResult


class FakeRunner:
    """Stands in for subprocess: records every command and where it ran."""

    def __init__(
        self, respond: Callable[[CommandEntity], tuple[int, str]] | None = None
    ) -> None:
        self.respond = respond or (lambda _: (0, ""))
        self.calls: list[CommandEntity] = []
        self.cwds: list[Path] = []

    def __call__(self, cmd: CommandEntity) -> ProcessResult:
        self.calls.append(cmd)
        self.cwds.append(Path.cwd())
        returncode, output = self.respond(cmd)
        return ProcessResult(command=cmd.command, returncode=returncode, output=output)

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [cmd.command for cmd in self.calls]

    def tools(self) -> list[str]:
        return [Path(cmd.command[0]).name for cmd in self.calls]


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    root = (tmp_path / "app").resolve()
    (root / "src").mkdir(parents=True)
    (root / "include").mkdir()
    (root / "CMakeLists.txt").write_text("cmake_minimum_required(VERSION 3.20)\n")
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def vcpkg_root(tmp_path) -> Path:
    root = (tmp_path / "vcpkg").resolve()
    toolchain = root / "scripts" / "buildsystems" / "vcpkg.cmake"
    toolchain.parent.mkdir(parents=True)
    toolchain.write_text("")
    return root


@pytest.fixture
def tools(tmp_path, vcpkg_root) -> dict[str, str]:
    """What the fake PATH lookup resolves."""
    return {
        "cmake": str(tmp_path / "bin" / "cmake"),
        "clang-format": str(tmp_path / "bin" / "clang-format"),
        "vcpkg": str(vcpkg_root / "vcpkg"),
    }


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


def make_config(root: Path, **overrides) -> Config:
    values = dict(
        name="app",
        project=root,
        build=root / "build",
        src=root / "src",
        include=root / "include",
        extensions=DEFAULT_EXTENSIONS,
    )
    values.update(overrides)
    return Config(**values)


@pytest.fixture
def make_context(project, tools, runner):
    default_runner = runner

    def factory(
        runner: FakeRunner | None = None, fallbacks: dict | None = None, **overrides
    ) -> Context:
        return Context(
            config=make_config(project, **overrides),
            runner=runner or default_runner,
            which=tools.get,
            fallbacks=fallbacks or {},
        )

    return factory


@pytest.fixture
def context(make_context) -> Context:
    return make_context()


@pytest.fixture
def use_runner(monkeypatch, tools):
    """Make ``pybuildcm.main`` build its Context on the fakes."""

    def install(runner: FakeRunner) -> FakeRunner:
        monkeypatch.setattr(
            "pybuildcm.main.Context",
            partial(Context, runner=runner, which=tools.get, fallbacks={}),
        )
        return runner

    return install


@pytest.fixture
def fake_boundary(use_runner, runner) -> FakeRunner:
    return use_runner(runner)
