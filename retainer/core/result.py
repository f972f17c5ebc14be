"""Result type for boundary operations.

Loading config and data files can fail in ways the caller is expected to
handle (missing file, bad JSON). Those functions return ``Ok(value)`` or
``Err(error)`` instead of raising, and callers branch on the variant:

    result = load_config(path)
    if isinstance(result, Err):
        print(result.error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
