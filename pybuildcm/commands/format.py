from pathlib import Path

from returns.io import IOFailure, IOResultE, IOSuccess, impure_safe
from returns.pipeline import is_successful

from pybuildcm import report
from pybuildcm.domain.context import Context
from pybuildcm.domain.entities import CommandEntity, FormatSummary
from pybuildcm.domain.files import source_files
from pybuildcm.domain.probe import FORMATTER, find_formatter
from pybuildcm.domain.services import execute
from pybuildcm.errors import FormatCheckError


def _relative(context: Context, file: Path) -> Path:
    try:
        return file.relative_to(context.config.project)
    except ValueError:
        return file


def _format_all(context: Context, clang_format: Path) -> FormatSummary:
    formatted: tuple[Path, ...] = ()
    failed: tuple[Path, ...] = ()

    for file in source_files(context.config):
        res = execute(
            context.runner,
            CommandEntity(command=(str(clang_format), "-i", str(file)), tag=FORMATTER),
            context.config.verbose,
        )
        if is_successful(res):
            formatted += (file,)
        else:
            failed += (file,)

    return FormatSummary(formatted=formatted, failed=failed)


def _report_format(context: Context, summary: FormatSummary) -> FormatSummary:
    if not summary.formatted and not summary.failed:
        report.warning("No source files found")
        return summary
    if summary.formatted:
        report.success(f"Formatted {len(summary.formatted)} file(s)")
    if summary.failed:
        report.warning(
            f"Failed to format {len(summary.failed)} file(s): "
            + ", ".join(str(_relative(context, file)) for file in summary.failed)
        )
    return summary


def format_sources(context: Context) -> IOResultE[FormatSummary]:
    """Rewrite every source file in place.

    Files clang-format chokes on are reported but do not fail the action;
    only a missing clang-format does.
    """
    report.info("Formatting source files")
    return (
        find_formatter(context)
        .bind(impure_safe(lambda clang_format: _format_all(context, clang_format)))
        .map(lambda summary: _report_format(context, summary))
    )


def _check_all(
    context: Context, clang_format: Path
) -> tuple[tuple[Path, ...], tuple[Path, ...]]:
    checked: tuple[Path, ...] = ()
    bad: tuple[Path, ...] = ()

    for file in source_files(context.config):
        cmd = CommandEntity(
            command=(str(clang_format), "--dry-run", "--Werror", str(file)),
            tag=FORMATTER,
        )
        if context.config.verbose:
            report.command(cmd.command)
        res = context.runner(cmd)
        checked += (file,)
        if res.returncode != 0:
            bad += (file,)
        if res.returncode != 0 or context.config.verbose:
            report.output(cmd.tag, res.output)

    return checked, bad


def _check_result(
    context: Context, checked: tuple[Path, ...], bad: tuple[Path, ...]
) -> IOResultE[tuple[Path, ...]]:
    if bad:
        return IOFailure(FormatCheckError(_relative(context, file) for file in bad))
    if checked:
        report.success(f"All {len(checked)} file(s) are formatted correctly")
    else:
        report.warning("No source files found")
    return IOSuccess(checked)


def check_format(context: Context) -> IOResultE[tuple[Path, ...]]:
    """Dry-run clang-format over every source file, collecting all offenders."""
    report.info("Checking source formatting")
    return (
        find_formatter(context)
        .bind(impure_safe(lambda clang_format: _check_all(context, clang_format)))
        .bind(lambda res: _check_result(context, *res))
    )
