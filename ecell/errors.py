from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised when a rule, row or run setting falls outside its domain."""
