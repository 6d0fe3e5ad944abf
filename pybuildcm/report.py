from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _print(out: Console, marker: str, style: str, message: str) -> None:
    out.print(f"[{style}]{escape(marker)}[/{style}] {escape(message)}", soft_wrap=True)


def info(message: str) -> None:
    _print(console, "[*]", "cyan", message)


def success(message: str) -> None:
    _print(console, "[+]", "green", message)


def warning(message: str) -> None:
    _print(console, "[!]", "yellow", message)


def error(message: str) -> None:
    _print(err_console, "[x]", "bold red", message)


def output(tag: str, text: str) -> None:
    """Echo captured tool output, one tagged line at a time."""
    for line in text.splitlines():
        console.print(f"[dim]{escape(f'[{tag}]')}[/dim] {escape(line)}", soft_wrap=True)


def command(cmd) -> None:
    console.print(f"[dim]$ {escape(' '.join(map(str, cmd)))}[/dim]", soft_wrap=True)
