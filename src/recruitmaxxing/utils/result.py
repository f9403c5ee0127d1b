"""Tagged success/failure values passed between coercion stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from recruitmaxxing.errors import PipelineError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        return fn(self.value)


@dataclass(frozen=True)
class Failure:
    error: PipelineError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error

    def then(self, fn: Callable[[Any], "Result[U]"]) -> "Failure":
        return self


Result = Union[Ok[T], Failure]
