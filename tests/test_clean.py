from returns.io import IOSuccess
from returns.pipeline import is_successful

from pybuildcm.commands.clean import clean


def test_clean_removes_the_build_directory(context, project):
    (project / "build" / "CMakeFiles").mkdir(parents=True)
    (project / "build" / "CMakeCache.txt").write_text("")

    assert clean(context) == IOSuccess(project / "build")
    assert not (project / "build").exists()
    assert (project / "src").is_dir()


def test_clean_without_build_directory_succeeds(context, project, capsys):
    assert is_successful(clean(context))
    assert "Nothing to clean" in capsys.readouterr().out


def test_clean_twice(context, project):
    (project / "build").mkdir()

    assert is_successful(clean(context))
    assert is_successful(clean(context))


def test_clean_runs_no_process(context, project, runner):
    (project / "build").mkdir()
    clean(context)
    assert runner.calls == []
