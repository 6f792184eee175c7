from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from .errors import InvalidConfiguration

WIDTH = 32
RULE_COUNT = 256
NEIGHBORHOODS = 8


def is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def validate_rule(rule: int | None) -> None:
    if not is_integer(rule) or not 0 <= rule < RULE_COUNT:
        raise InvalidConfiguration(f"rule must be in [0, {RULE_COUNT - 1}], got {rule!r}")


def validate_row(row: int, width: int) -> None:
    if not is_integer(width) or width <= 0:
        raise InvalidConfiguration(f"width must be >= 1, got {width!r}")
    if not is_integer(row) or not 0 <= row < (1 << width):
        raise InvalidConfiguration(f"row {row!r} does not fit in {width} cells")


def validate_generations(generations: int) -> None:
    if not is_integer(generations) or generations < 0:
        raise InvalidConfiguration(f"generations must be an integer >= 0, got {generations!r}")


def rule_table(rule: int) -> np.ndarray:
    """Return the 8-entry lookup table for an ECA rule.

    Entry v is the next state for the neighborhood v = (left<<2)|(self<<1)|right,
    so table[0] is pattern 000 and table[7] is pattern 111.
    """
    validate_rule(rule)
    rule = int(rule)
    return np.array([(rule >> v) & 1 for v in range(NEIGHBORHOODS)], dtype=np.uint8)


def evaluate(rule: int, neighborhood: int) -> int:
    """Next state (0 or 1) of a cell whose neighborhood code is `neighborhood`."""
    return (rule >> neighborhood) & 1


def row_to_cells(row: int, width: int = WIDTH) -> np.ndarray:
    """Unpack a row bitfield into cells, most significant bit first."""
    return np.array([(row >> i) & 1 for i in range(width - 1, -1, -1)], dtype=np.uint8)


def cells_to_row(cells: np.ndarray) -> int:
    row = 0
    for cell in cells.tolist():
        row = (row << 1) | int(cell)
    return row


def step_cells(cells: np.ndarray, table: np.ndarray) -> np.ndarray:
    """One synchronous step over cells ordered most significant bit first.

    np.roll wraps both ends, so bit W-1 reads bit 0 as its left neighbor and
    bit 0 reads bit W-1 as its right neighbor.
    """
    left = np.roll(cells, 1)
    right = np.roll(cells, -1)
    codes = (left << 2) | (cells << 1) | right
    return table[codes].astype(np.uint8)


def step(row: int, rule: int, width: int = WIDTH) -> int:
    """Return the generation after `row` under `rule` on a ring of `width` cells."""
    validate_rule(rule)
    validate_row(row, width)
    return cells_to_row(step_cells(row_to_cells(int(row), width), rule_table(rule)))


def run(initial: int, rule: int, generations: int, width: int = WIDTH) -> Iterator[int]:
    """Yield `initial` followed by `generations` successive rows.

    Arguments are checked eagerly; rows are computed as they are consumed.
    """
    validate_rule(rule)
    validate_row(initial, width)
    validate_generations(generations)
    return _rows(int(initial), rule_table(rule), generations, width)


def _rows(row: int, table: np.ndarray, generations: int, width: int) -> Iterator[int]:
    cells = row_to_cells(row, width)
    yield row
    for _ in range(generations):
        cells = step_cells(cells, table)
        yield cells_to_row(cells)
