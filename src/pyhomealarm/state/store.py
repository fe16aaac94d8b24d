"""Security store contract and the in-memory reference store.

The engine never caches anything: every decision starts from what a
:class:`SecurityStore` returns, so swapping the store swaps where state lives
without touching the policy.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from pyhomealarm.exceptions import UnknownSensorError
from pyhomealarm.models.sensor import Sensor
from pyhomealarm.models.status import AlarmStatus, ArmingStatus

_logger = logging.getLogger(__name__)


class SecurityStore(Protocol):
    """Structural store interface consumed by the engine.

    ``get_sensors`` must return a snapshot: mutating the returned sensors
    must not change the store until they are passed to ``update_sensor``.
    """

    def add_sensor(self, sensor: Sensor) -> None: ...

    def remove_sensor(self, sensor: Sensor) -> None: ...

    def update_sensor(self, sensor: Sensor) -> None: ...

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None: ...

    def set_arming_status(self, arming_status: ArmingStatus) -> None: ...

    def set_cat_detected(self, cat_detected: bool) -> None: ...

    def get_sensors(self) -> set[Sensor]: ...

    def get_alarm_status(self) -> AlarmStatus: ...

    def get_arming_status(self) -> ArmingStatus: ...

    def get_cat_detected(self) -> bool: ...


class SystemState(BaseModel):
    """Everything a store holds, as one serialisable document."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    sensors: list[Sensor] = Field(default_factory=list)
    alarm_status: AlarmStatus = AlarmStatus.NO_ALARM
    arming_status: ArmingStatus = ArmingStatus.DISARMED
    cat_detected: bool = False


class InMemorySecurityStore:
    """Reference store keeping :class:`SystemState` in process memory.

    Reads hand out copies, and a lock keeps concurrent readers from
    observing a half-applied write. A mutation whose ``_changed`` hook
    raises is rolled back, so the store never reports state it failed to
    commit. This does not make engine operations atomic; callers that drive
    the engine from several threads still need to serialise those calls
    themselves.
    """

    def __init__(self, state: SystemState | None = None) -> None:
        self._lock = threading.RLock()
        self._state = state.model_copy(deep=True) if state is not None else SystemState()

    def _index(self, sensor: Sensor) -> int | None:
        for i, existing in enumerate(self._state.sensors):
            if existing == sensor:
                return i
        return None

    def _changed(self) -> None:
        """Hook run after every mutation while the lock is held."""

    @contextlib.contextmanager
    def _mutation(self) -> Iterator[SystemState]:
        with self._lock:
            previous = self._state.model_copy(deep=True)
            try:
                yield self._state
                self._changed()
            except Exception:
                self._state = previous
                raise

    def snapshot(self) -> SystemState:
        """Deep copy of the whole state."""
        with self._lock:
            return self._state.model_copy(deep=True)

    def add_sensor(self, sensor: Sensor) -> None:
        with self._mutation() as state:
            stored = sensor.model_copy()
            index = self._index(sensor)
            if index is None:
                state.sensors.append(stored)
            else:
                state.sensors[index] = stored

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._mutation() as state:
            index = self._index(sensor)
            if index is None:
                raise UnknownSensorError(f"sensor {sensor.name!r} is not registered", sensor_name=sensor.name)
            del state.sensors[index]

    def update_sensor(self, sensor: Sensor) -> None:
        with self._mutation() as state:
            index = self._index(sensor)
            if index is None:
                raise UnknownSensorError(f"sensor {sensor.name!r} is not registered", sensor_name=sensor.name)
            state.sensors[index] = sensor.model_copy()
            _logger.debug("Sensor %s (%s) active=%s", sensor.name, sensor.sensor_type, sensor.active)

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        with self._mutation() as state:
            state.alarm_status = alarm_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        with self._mutation() as state:
            state.arming_status = arming_status

    def set_cat_detected(self, cat_detected: bool) -> None:
        with self._mutation() as state:
            state.cat_detected = cat_detected

    def get_sensors(self) -> set[Sensor]:
        with self._lock:
            return {sensor.model_copy() for sensor in self._state.sensors}

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self._state.alarm_status

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self._state.arming_status

    def get_cat_detected(self) -> bool:
        with self._lock:
            return self._state.cat_detected
