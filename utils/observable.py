"""Observable state slot shared by the request controllers and the views."""

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")


class Observable(Generic[T]):
    """
    Holds the latest value of a piece of state and notifies subscribers on every set.

    Subscribers run synchronously, in subscription order, on the caller's thread.
    """

    def __init__(self, value: T):
        self._value = value
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback; returns a function that removes it again."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
