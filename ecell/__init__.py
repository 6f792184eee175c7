"""Elementary cellular automata on a circular row of cells."""

from .config import RunConfig
from .eca import WIDTH, evaluate, rule_table, run, step
from .engine import Automaton
from .errors import InvalidConfiguration

__all__ = [
    "Automaton",
    "InvalidConfiguration",
    "RunConfig",
    "WIDTH",
    "evaluate",
    "rule_table",
    "run",
    "step",
]
