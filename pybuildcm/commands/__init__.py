from typing import Any

from returns.io import IOResultE

from pybuildcm.commands.build import build, rebuild
from pybuildcm.commands.clean import clean
from pybuildcm.commands.deps import install_dependencies
from pybuildcm.commands.format import check_format, format_sources
from pybuildcm.commands.generate import generate
from pybuildcm.domain.context import Context
from pybuildcm.errors import UsageError
from pybuildcm.types import Action


def all_(context: Context) -> IOResultE[Any]:
    return (
        format_sources(context)
        .bind(lambda _: generate(context))
        .bind(lambda _: build(context))
    )


def run_action(action: Action, context: Context) -> IOResultE[Any]:
    match action:
        case "clean":
            return clean(context)
        case "generate":
            return generate(context)
        case "build":
            return build(context)
        case "rebuild":
            return rebuild(context)
        case "format":
            return format_sources(context)
        case "check-format":
            return check_format(context)
        case "deps":
            return install_dependencies(context)
        case "all":
            return all_(context)
        case action:
            return IOResultE.from_failure(UsageError(f"'{action}' is not an action"))
