from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from .eca import RULE_COUNT, WIDTH, is_integer
from .errors import InvalidConfiguration

DEFAULT_GENERATIONS = 31


@dataclass
class RunConfig:
    rule: int | None = None
    population: int | None = None
    generations: int = DEFAULT_GENERATIONS
    output: str | None = None
    quiet: bool = False
    verbose: bool = False
    seed: int | None = None

    def validate(self) -> None:
        for name in ("rule", "population", "seed"):
            value = getattr(self, name)
            if value is not None and not is_integer(value):
                raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
        if not is_integer(self.generations):
            raise InvalidConfiguration(f"generations must be an integer, got {self.generations!r}")

        if self.rule is not None and not 0 <= self.rule < RULE_COUNT:
            raise InvalidConfiguration(f"rule must be in [0, {RULE_COUNT - 1}], got {self.rule}")
        if self.population is not None and not 0 <= self.population < (1 << WIDTH):
            raise InvalidConfiguration(f"population must be a {WIDTH}-bit unsigned int, got {self.population}")
        if self.generations < 0:
            raise InvalidConfiguration(f"generations must be >= 0, got {self.generations}")
        if self.seed is not None and self.seed < 0:
            raise InvalidConfiguration(f"seed must be >= 0, got {self.seed}")
        if self.output is not None and not isinstance(self.output, str):
            raise InvalidConfiguration(f"output must be a file path, got {self.output!r}")
        if self.quiet and self.verbose:
            raise InvalidConfiguration("quiet and verbose mode cannot both be enabled")


def _deep_update(target: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_update(target[key], value)
        else:
            target[key] = value
    return target


def load_run_config(path: str | Path | None = None, overrides: dict[str, Any] | None = None) -> RunConfig:
    base = asdict(RunConfig())
    if path is not None:
        try:
            raw = yaml.safe_load(Path(path).read_text()) or {}
        except OSError as exc:
            raise InvalidConfiguration(f"cannot read config file {path}: {exc.strerror}") from exc
        except yaml.YAMLError as exc:
            raise InvalidConfiguration(f"{path}: invalid YAML: {exc}") from exc
        if not isinstance(raw, dict):
            raise InvalidConfiguration(f"{path}: expected a mapping at the top level")
        _deep_update(base, raw)
    if overrides:
        _deep_update(base, overrides)

    unknown = set(base) - set(asdict(RunConfig()))
    if unknown:
        raise InvalidConfiguration(f"unknown config keys: {', '.join(sorted(unknown))}")

    config = RunConfig(**base)
    config.validate()
    return config


def save_run_config(config: RunConfig, path: str | Path) -> None:
    payload = asdict(config)
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        Path(path).write_text(yaml.safe_dump(payload, sort_keys=False))
    except OSError as exc:
        raise InvalidConfiguration(f"cannot write config file {path}: {exc.strerror}") from exc


def resolve_run_config(config: RunConfig) -> RunConfig:
    """Fill in a random rule and population where none was given."""
    config.validate()
    rng = np.random.default_rng(config.seed)
    rule = config.rule
    population = config.population
    if rule is None:
        rule = int(rng.integers(0, RULE_COUNT))
    if population is None:
        population = int(rng.integers(0, 1 << WIDTH, dtype=np.uint64))
    return replace(config, rule=rule, population=population)
