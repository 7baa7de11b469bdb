"""Result values for the command pipeline.

A step yields `Ok` with its value or `Err` with the `ScriptError` that ends
the run; `unwrap` turns the final outcome back into a value or a raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Ok[T] | Err[E]
