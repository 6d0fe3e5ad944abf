from pathlib import Path
from typing import Protocol
import argparse

from returns.result import Failure, ResultE, Success

from pybuildcm.__version__ import __version__
from pybuildcm.errors import UsageError
from pybuildcm.types import Action, Mode

DEFAULT_ACTION: Action = "rebuild"

HELP_FLAGS = ("-help", "--help", "-h", "-?")

# (switch, long switch, dest, action, help); -Clean and -Clear are one request
_SWITCHES: tuple[tuple[str, str, str, Action, str], ...] = (
    ("-Clean", "--clean", "clean", "clean", "delete the build directory"),
    ("-Clear", "--clear", "clear", "clean", "alias for -Clean"),
    ("-Build", "--build", "build", "build", "build, generating first if needed"),
    ("-Rebuild", "--rebuild", "rebuild", "rebuild", "clean, then build (default)"),
    ("-Generate", "--generate", "generate", "generate", "generate build files only"),
    ("-Format", "--format", "format", "format", "format sources in place"),
    (
        "-CheckFormat",
        "--check-format",
        "check_format",
        "check-format",
        "verify formatting",
    ),
    ("-All", "--all", "all", "all", "format, generate and build"),
    ("-Deps", "--deps", "deps", "deps", "install vcpkg dependencies"),
)

ACTION_SWITCHES: dict[str, Action] = {
    dest: action for _, _, dest, action, _ in _SWITCHES
}
_SWITCH_NAMES = {dest: switch for switch, _, dest, _, _ in _SWITCHES}


class ArgsConfig(Protocol):
    dir: Path
    mode: Mode
    generator: str | None
    verbose: bool

    clean: bool
    clear: bool
    build: bool
    rebuild: bool
    generate: bool
    format: bool
    check_format: bool
    all: bool
    deps: bool


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def _mode(value: str) -> Mode:
    match value.lower():
        case "debug":
            return "Debug"
        case "release":
            return "Release"
        case _:
            raise argparse.ArgumentTypeError(
                f"invalid mode '{value}' (choose from Debug, Release)"
            )


def create_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="pybuildcm",
        description="Clean, generate, build and format a CMake + vcpkg C/C++ project.",
        epilog="Without an action switch the project is rebuilt (-Rebuild).",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-Help",
        "-h",
        "--help",
        "-?",
        action="store_true",
        help="show this help and exit",
    )
    parser.add_argument("--version", action="version", version=__version__)

    actions = parser.add_argument_group("actions (mutually exclusive)")
    for switch, long_switch, dest, _, description in _SWITCHES:
        actions.add_argument(
            switch, long_switch, dest=dest, action="store_true", help=description
        )

    options = parser.add_argument_group("options")
    options.add_argument(
        "-Generator",
        "--generator",
        dest="generator",
        default=None,
        metavar="NAME",
        help="CMake generator to use instead of the detected one",
    )
    options.add_argument(
        "-Config",
        "--config",
        dest="mode",
        type=_mode,
        default="Release",
        metavar="{Debug,Release}",
        help="build configuration (default: Release)",
    )
    options.add_argument(
        "-Dir",
        "--dir",
        dest="dir",
        type=Path,
        default=Path.cwd(),
        help="project root (default: current directory)",
    )
    options.add_argument(
        "-Verbose",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="echo commands and tool output",
    )
    return parser


def wants_help(argv: list[str]) -> bool:
    return any(arg.lower() in HELP_FLAGS for arg in argv)


def _switch_case(parser: ArgumentParser, arg: str) -> str:
    """Map ``-build`` or ``-CONFIG=debug`` onto the switch as it was declared."""
    if not arg.startswith("-"):
        return arg
    name, sep, value = arg.partition("=")
    switches = {
        option.lower(): option
        for action in parser._actions
        for option in action.option_strings
    }
    return switches.get(name.lower(), name) + sep + value


def args_parse(argv: list[str]) -> ArgsConfig:
    parser = create_parser()
    return parser.parse_args(  # type: ignore
        [_switch_case(parser, arg) for arg in argv]
    )


def resolve_action(args: ArgsConfig) -> ResultE[Action]:
    requested = [dest for dest in ACTION_SWITCHES if getattr(args, dest)]
    actions = list(dict.fromkeys(ACTION_SWITCHES[dest] for dest in requested))

    if len(actions) > 1:
        return Failure(
            UsageError(
                "Multiple actions specified: "
                + ", ".join(_SWITCH_NAMES[dest] for dest in requested)
                + ". Choose one."
            )
        )
    if actions:
        return Success(actions[0])
    return Success(DEFAULT_ACTION)
