"""
Observable value holders for the view layer.

An ``InputState`` starts empty; ``values()`` emits the current value (if any)
to each new subscriber and then every value put afterwards.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from reactivex import Observable
from reactivex import operators as ops
from reactivex.subject import BehaviorSubject

T = TypeVar("T")

_UNSET: Any = object()


class InputState(Generic[T]):
    def __init__(self) -> None:
        self._subject: BehaviorSubject = BehaviorSubject(_UNSET)

    @property
    def has_value(self) -> bool:
        return self._subject.value is not _UNSET

    @property
    def value(self) -> T | None:
        v = self._subject.value
        return None if v is _UNSET else v

    def put_value(self, value: T) -> None:
        self._subject.on_next(value)

    def values(self) -> Observable:
        return self._subject.pipe(ops.filter(lambda v: v is not _UNSET))

    def complete(self) -> None:
        self._subject.on_completed()
