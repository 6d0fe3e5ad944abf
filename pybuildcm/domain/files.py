from collections.abc import Iterator
from itertools import chain
from pathlib import Path

from pybuildcm.config import Config


def _matching(directory: Path, extensions: tuple[str, ...]) -> Iterator[Path]:
    if not directory.is_dir():
        return iter(())
    return (
        file
        for file in directory.rglob("*")
        if file.is_file() and file.suffix.lower() in extensions
    )


def source_files(config: Config) -> Iterator[Path]:
    """Source and header files under the source and include directories.

    Computed lazily on every call; sorted so reports come out stable.
    """
    seen: set[Path] = set()
    for file in sorted(
        chain(
            _matching(config.src, config.extensions),
            _matching(config.include, config.extensions),
        )
    ):
        if file not in seen:
            seen.add(file)
            yield file
