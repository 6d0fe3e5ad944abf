from pathlib import Path

import pytest

from pybuildcm.main import main

from conftest import FakeRunner


@pytest.mark.parametrize(
    "argv", [["-Help"], ["-Build", "-Format", "-Help"], ["-Nope", "-h"]]
)
def test_help_exits_zero(argv, capsys, fake_boundary):
    assert main(argv) == 0

    out = capsys.readouterr().out
    assert "usage: pybuildcm" in out
    assert "-CheckFormat" in out
    assert fake_boundary.calls == []


def test_multiple_actions_exit_one_without_running_anything(
    project, capsys, fake_boundary
):
    assert main(["-Build", "-Format"]) == 1

    captured = capsys.readouterr()
    assert "Multiple actions specified: -Build, -Format" in captured.err
    assert "usage: pybuildcm" in captured.out
    assert fake_boundary.calls == []
    assert not (project / "build").exists()


def test_unknown_switch_exits_one(project, capsys, fake_boundary):
    assert main(["-Install"]) == 1
    assert "unrecognized arguments: -Install" in capsys.readouterr().err


def test_missing_source_directory_fails_every_action(project, capsys, fake_boundary):
    (project / "src").rmdir()

    for argv in ([], ["-Clean"], ["-Build"], ["-Generate"], ["-Format"], ["-Deps"]):
        assert main(argv) == 1

    assert "Source directory" in capsys.readouterr().err
    assert fake_boundary.calls == []
    assert not (project / "build").exists()


def test_missing_cmakelists_is_a_prerequisite_error(project, capsys, fake_boundary):
    (project / "CMakeLists.txt").unlink()
    (project / "build").mkdir()

    assert main(["-Clean"]) == 1

    assert "CMakeLists.txt not found" in capsys.readouterr().err
    assert (project / "build").exists()


def test_rebuild_scenario_without_build_directory(
    project, capsys, fake_boundary, tools
):
    assert main([]) == 0

    out = capsys.readouterr().out
    assert "Nothing to clean" in out
    assert (project / "build").is_dir()
    cmake = tools["cmake"]
    assert [cmd[:2] for cmd in fake_boundary.commands] == [
        (cmake, str(project)),
        (cmake, "--build"),
    ]


@pytest.mark.parametrize("failing", ["configure", "build"])
def test_rebuild_fails_when_a_tool_fails(project, use_runner, failing, capsys):
    use_runner(
        FakeRunner(
            lambda cmd: (1, "boom")
            if (cmd.command[1] == "--build") == (failing == "build")
            else (0, "")
        )
    )

    assert main([]) == 1
    assert "[cmake] boom" in capsys.readouterr().out


def test_check_format_reports_only_the_bad_file(project, use_runner, capsys):
    for name in ("good.cpp", "bad.cpp", "other.hpp"):
        (project / "src" / name).write_text("int x;\n")
    use_runner(
        FakeRunner(
            lambda cmd: (1, "") if cmd.command[-1].endswith("bad.cpp") else (0, "")
        )
    )

    assert main(["-CheckFormat"]) == 1

    err = capsys.readouterr().err
    assert str(Path("src", "bad.cpp")) in err
    assert "good.cpp" not in err
    assert "other.hpp" not in err
    assert "-Format" in err


def test_dir_option_points_at_the_project(project, tmp_path, monkeypatch, fake_boundary):
    monkeypatch.chdir(tmp_path)
    (project / "build").mkdir()

    assert main(["-Clean", "-Dir", str(project)]) == 0
    assert not (project / "build").exists()


def test_config_file_errors_are_reported(project, capsys, fake_boundary):
    (project / "pybuildcm.toml").write_text("[project\n")

    assert main(["-Clean"]) == 1
    assert "Invalid configuration" in capsys.readouterr().err


@pytest.mark.parametrize("build_dir", [".", "src"])
def test_clean_never_removes_project_sources(
    project, capsys, fake_boundary, build_dir
):
    (project / "src" / "main.cpp").write_text("int main() {}\n")
    (project / "pybuildcm.toml").write_text(f'[project]\nbuild_dir = "{build_dir}"\n')

    assert main(["-Clean"]) == 1

    assert (project / "src" / "main.cpp").exists()
    assert "would contain" in capsys.readouterr().err
