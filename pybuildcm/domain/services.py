from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
import os
import subprocess

from returns.io import IOFailure, IOResultE, IOSuccess, impure_safe

from pybuildcm import report
from pybuildcm.domain.entities import CommandEntity, ProcessResult
from pybuildcm.errors import ProcessError

Runner = Callable[[CommandEntity], ProcessResult]


def subprocess_run(cmd: CommandEntity) -> ProcessResult:
    """Run a command to completion with stdout and stderr merged."""
    res = subprocess.run(
        cmd.command,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
    )
    return ProcessResult(
        command=cmd.command, returncode=res.returncode, output=res.stdout
    )


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    cwd = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(cwd)


def execute(
    runner: Runner, cmd: CommandEntity, verbose: bool = False
) -> IOResultE[ProcessResult]:
    """Run ``cmd`` through ``runner`` and turn a non-zero exit into a failure.

    The captured output is echoed with the command's tag when the process
    fails, and on success only in verbose mode.
    """
    if verbose:
        report.command(cmd.command)

    def check(res: ProcessResult) -> IOResultE[ProcessResult]:
        if res.returncode != 0:
            report.output(cmd.tag, res.output)
            return IOFailure(ProcessError(res.command, res.returncode, res.output))
        if verbose:
            report.output(cmd.tag, res.output)
        return IOSuccess(res)

    return impure_safe(runner)(cmd).bind(check)
