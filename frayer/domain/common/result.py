"""Outcome values for store and domain calls; failures are data, not exceptions."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    is_success: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(True, value=value)

    @classmethod
    def fail(cls, error: str) -> "Result[T]":
        return cls(False, error=error)

    def then(self, step: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Run `step` on the value; a failure passes through untouched."""
        if not self.is_success:
            return Result.fail(self.error)
        return step(self.value)

    def unwrap(self) -> T:
        if not self.is_success:
            raise ValueError(self.error)
        return self.value

    def __str__(self) -> str:
        return f"ok: {self.value!r}" if self.is_success else f"failed: {self.error}"
