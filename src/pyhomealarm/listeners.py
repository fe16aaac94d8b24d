"""Status listener contract and the fan-out registry."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Protocol

from pyhomealarm.models.status import AlarmStatus


class StatusListener(Protocol):
    """Receives alarm, sensor-reset and cat-detection notifications.

    Listeners must be hashable: the registry keys on them, so an @dataclass
    listener needs ``eq=False`` (or ``frozen=True``).

    Callbacks run synchronously on the thread that triggered them, so a slow
    listener stalls the engine operation; queue heavy work elsewhere.
    """

    def alarm_status_changed(self, status: AlarmStatus) -> None: ...

    def sensor_status_changed(self) -> None: ...

    def cat_detected(self, cat: bool) -> None: ...


class ListenerRegistry:
    """Insertion-ordered set of listeners.

    Registering a listener twice keeps a single entry. Notifications iterate
    over a copy, so listeners added or removed from inside a callback only
    take part in later notifications.
    """

    def __init__(self, listeners: Iterable[StatusListener] = ()) -> None:
        self._listeners: dict[StatusListener, None] = dict.fromkeys(listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def __iter__(self) -> Iterator[StatusListener]:
        return iter(list(self._listeners))

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners

    def add(self, listener: StatusListener) -> None:
        self._listeners[listener] = None

    def discard(self, listener: StatusListener) -> None:
        self._listeners.pop(listener, None)

    def _each(self, call: Callable[[StatusListener], None]) -> None:
        for listener in list(self._listeners):
            call(listener)

    def alarm_status_changed(self, status: AlarmStatus) -> None:
        self._each(lambda listener: listener.alarm_status_changed(status))

    def sensor_status_changed(self) -> None:
        self._each(lambda listener: listener.sensor_status_changed())

    def cat_detected(self, cat: bool) -> None:
        self._each(lambda listener: listener.cat_detected(cat))
