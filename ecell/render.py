from __future__ import annotations

from .config import RunConfig
from .eca import NEIGHBORHOODS, WIDTH

ALIVE = "[]"
DEAD = "__"


def render_row(row: int, width: int = WIDTH, alive: str = ALIVE, dead: str = DEAD) -> str:
    """Draw a row leftmost (most significant) cell first."""
    return "".join(alive if (row >> i) & 1 else dead for i in range(width - 1, -1, -1))


def render_rule(rule: int) -> str:
    """Chart each neighborhood pattern, 111 down to 000, above its next state."""
    codes = range(NEIGHBORHOODS - 1, -1, -1)
    header = "\t".join(format(v, "03b") for v in codes)
    bits = "".join(f" {(rule >> v) & 1} \t" for v in codes)
    return f"{header}\n{bits}"


def describe_run(config: RunConfig) -> str:
    text = (
        f"Initial population = {config.population}, rule = {config.rule}, "
        f"number of generations = {config.generations}"
    )
    if config.output:
        return text + f", printing to {config.output}."
    return text + ", no output file given."
