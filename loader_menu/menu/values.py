"""Late-bound values for labels and choice lists.

A label or choice list is either fixed when the menu is defined or
produced on demand at render time. Both shapes share ``resolve`` so
callers never inspect the underlying value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Static(Generic[T]):
    value: T

    def resolve(self, *args: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Producer(Generic[T]):
    func: Callable[..., T]

    def resolve(self, *args: Any) -> T:
        return self.func(*args)


Dynamic = Union[Static[T], Producer[T]]


def dynamic(value) -> Dynamic:
    """Wrap a plain value or a callable, leaving wrapped values alone."""
    if isinstance(value, (Static, Producer)):
        return value
    if callable(value):
        return Producer(value)
    return Static(value)
