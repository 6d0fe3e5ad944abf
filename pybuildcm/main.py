from typing import Any
import sys

from returns.io import IOResultE
from returns.result import Failure, Success
from returns.unsafe import unsafe_perform_io

from pybuildcm import report
from pybuildcm.args import (
    ArgsConfig,
    args_parse,
    create_parser,
    resolve_action,
    wants_help,
)
from pybuildcm.commands import run_action
from pybuildcm.config import config_load
from pybuildcm.domain.context import Context
from pybuildcm.domain.prerequisites import check_prerequisites
from pybuildcm.errors import UsageError
from pybuildcm.types import Action


def pybuildcm(args: ArgsConfig, action: Action) -> IOResultE[Any]:
    return (
        config_load(args)
        .bind(check_prerequisites)
        .map(lambda config: Context(config=config))
        .bind(lambda context: run_action(action, context))
    )


def _exit_code(result: IOResultE[Any]) -> int:
    match unsafe_perform_io(result):
        case Success(_):
            return 0
        case Failure(UsageError() as e):
            report.error(str(e))
            print(create_parser().format_usage(), end="")
            return 1
        case Failure(e):
            report.error(str(e))
            return 1
    return 1


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if wants_help(argv):
        print(create_parser().format_help(), end="")
        return 0

    try:
        args = args_parse(argv)
    except UsageError as e:
        return _exit_code(IOResultE.from_failure(e))

    return _exit_code(
        IOResultE.from_result(resolve_action(args)).bind(
            lambda action: pybuildcm(args, action)
        )
    )


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
