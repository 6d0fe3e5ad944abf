from typing import Literal

Mode = Literal["Debug", "Release"]
Action = Literal[
    "clean",
    "build",
    "rebuild",
    "generate",
    "format",
    "check-format",
    "deps",
    "all",
    "help",
]


Cmd = tuple[str, ...]
