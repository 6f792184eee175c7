from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


class GenerationLog:
    """Writes one decimal row value per line to a file.

    Use as a context manager; the file is opened on entry.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._fh: TextIO | None = None

    def __enter__(self) -> "GenerationLog":
        try:
            self._fh = self.path.open("w")
        except OSError as exc:
            raise InvalidConfiguration(f"cannot open output file {self.path}: {exc.strerror}") from exc
        logger.debug("writing generations to %s", self.path)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def write_header(self, population: int, rule: int, generations: int) -> None:
        self._write(f"POP = {population}, RULE = {rule}, NUM_GEN = {generations}\n")

    def write_row(self, row: int) -> None:
        self._write(f"{row}\n")

    def _write(self, text: str) -> None:
        if self._fh is None:
            raise RuntimeError("GenerationLog is not open")
        self._fh.write(text)
