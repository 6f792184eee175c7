from __future__ import annotations

import logging
from collections.abc import Iterator

from .eca import (
    WIDTH,
    cells_to_row,
    row_to_cells,
    rule_table,
    step_cells,
    validate_generations,
    validate_row,
    validate_rule,
)
from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


class Automaton:
    """A configured rule and the row it is currently evolving.

    The rule is fixed at construction. Each `advance` replaces the whole row,
    so callers holding an earlier row never see it change.
    """

    def __init__(self, rule: int, initial_row: int | None, width: int = WIDTH):
        validate_rule(rule)
        if initial_row is None:
            raise InvalidConfiguration("an initial row is required")
        validate_row(initial_row, width)

        self._rule = int(rule)
        self._table = rule_table(rule)
        self._row = int(initial_row)
        self._width = int(width)
        self.generation = 0
        logger.debug("configured rule=%d row=%d width=%d", rule, initial_row, width)

    @classmethod
    def configure(cls, rule: int, initial_row: int | None, width: int = WIDTH) -> "Automaton":
        return cls(rule, initial_row, width=width)

    @property
    def rule(self) -> int:
        return self._rule

    @property
    def width(self) -> int:
        return self._width

    def current_row(self) -> int:
        return self._row

    def advance(self) -> int:
        cells = step_cells(row_to_cells(self._row, self._width), self._table)
        self._row = cells_to_row(cells)
        self.generation += 1
        logger.debug("generation %d: %d", self.generation, self._row)
        return self._row

    def generations(self, n: int) -> Iterator[int]:
        """Yield the current row, then the rows of `n` further advances."""
        validate_generations(n)
        yield self._row
        for _ in range(n):
            yield self.advance()

    def __repr__(self) -> str:
        return f"Automaton(rule={self._rule}, row={self._row}, width={self._width}, generation={self.generation})"
