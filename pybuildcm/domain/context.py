from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
import shutil

from pybuildcm.config import Config
from pybuildcm.domain.probe import Which, default_fallbacks
from pybuildcm.domain.services import Runner, subprocess_run


@dataclass(frozen=True)
class Context:
    """Everything a handler needs: the configuration and the process boundary."""

    config: Config
    runner: Runner = subprocess_run
    which: Which = shutil.which
    fallbacks: Mapping[str, Path] = field(default_factory=default_fallbacks)
