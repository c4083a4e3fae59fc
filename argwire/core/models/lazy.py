from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class Unresolved:
    """Marker state of a cell whose value has not been computed yet."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Unresolved"


UNRESOLVED = Unresolved()


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """Terminal state of a cell. `value` may legitimately be None."""
    value: T


class Lazy(Generic[T]):
    """
    Write-once cell holding either `Unresolved` or `Resolved(value)`.

    `resolve(compute)` returns the cached value when present; otherwise it
    runs `compute`, stores the result and returns it. The state is swapped
    with a single attribute assignment of an immutable `Resolved`, so a
    concurrent reader observes either the old or the new state, never a
    partial one. Two threads racing on the first resolve may both compute;
    `compute` must therefore be a pure function of immutable inputs.

    If `compute` raises, the cell stays unresolved.
    """

    __slots__ = ("_state",)

    def __init__(self, state: Resolved[T] | Unresolved = UNRESOLVED) -> None:
        self._state = state

    @classmethod
    def of(cls, value: T) -> "Lazy[T]":
        return cls(Resolved(value))

    @property
    def resolved(self) -> bool:
        return isinstance(self._state, Resolved)

    def peek(self, default: Any = None) -> T | Any:
        state = self._state
        if isinstance(state, Resolved):
            return state.value
        return default

    def resolve(self, compute: Callable[[], T]) -> T:
        state = self._state
        if isinstance(state, Resolved):
            return state.value

        value = compute()
        self._state = Resolved(value)
        return value

    def __repr__(self) -> str:
        return f"Lazy({self._state!r})"
