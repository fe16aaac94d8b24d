"""Alarm state machine.

:class:`AlarmEngine` holds no state of its own. Each operation reads the
current arming/alarm status and sensor snapshot from the store, applies the
security policy, writes the outcome back and notifies listeners. Nothing is
locked here: callers that invoke the engine from several threads must
serialise those calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pyhomealarm._constants import CAT_CONFIDENCE_THRESHOLD, validate_threshold
from pyhomealarm.config import AlarmConfig
from pyhomealarm.detector import CatDetector, FakeCatDetector
from pyhomealarm.exceptions import UnknownSensorError
from pyhomealarm.listeners import ListenerRegistry, StatusListener
from pyhomealarm.models.sensor import Sensor
from pyhomealarm.models.status import AlarmStatus, ArmingStatus
from pyhomealarm.state.file_store import JsonFileSecurityStore
from pyhomealarm.state.policy import all_sensors_inactive, all_sensors_inactive_except
from pyhomealarm.state.store import InMemorySecurityStore, SecurityStore

_logger = logging.getLogger(__name__)


class AlarmEngine:
    """Applies the security policy to arming changes, sensor toggles and camera frames.

    Usage::

        engine = AlarmEngine(InMemorySecurityStore(), detector)
        engine.add_sensor(Sensor(name="Front door", sensor_type=SensorType.DOOR))
        engine.set_arming_status(ArmingStatus.ARMED_AWAY)
    """

    def __init__(
        self,
        store: SecurityStore,
        detector: CatDetector,
        listeners: Iterable[StatusListener] = (),
        *,
        cat_confidence_threshold: float = CAT_CONFIDENCE_THRESHOLD,
    ) -> None:
        self._store = store
        self._detector = detector
        self._listeners = ListenerRegistry(listeners)
        self._cat_confidence_threshold = validate_threshold(cat_confidence_threshold)

    @classmethod
    def from_config(
        cls,
        config: AlarmConfig,
        *,
        store: SecurityStore | None = None,
        detector: CatDetector | None = None,
        listeners: Iterable[StatusListener] = (),
    ) -> AlarmEngine:
        """Build an engine, filling in reference collaborators the caller did not supply."""
        if store is None:
            store = JsonFileSecurityStore(config.state_file) if config.state_file else InMemorySecurityStore()
        if detector is None:
            detector = FakeCatDetector(config.detector_seed)
        return cls(
            store,
            detector,
            listeners,
            cat_confidence_threshold=config.cat_confidence_threshold,
        )

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def add_status_listener(self, listener: StatusListener) -> None:
        self._listeners.add(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        self._listeners.discard(listener)

    # ------------------------------------------------------------------
    # Store pass-throughs
    # ------------------------------------------------------------------

    def get_alarm_status(self) -> AlarmStatus:
        return self._store.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self._store.get_arming_status()

    def get_sensors(self) -> set[Sensor]:
        return self._store.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        self._store.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        self._store.remove_sensor(sensor)

    # ------------------------------------------------------------------
    # Policy
    # ------------------------------------------------------------------

    def set_alarm_status(self, status: AlarmStatus) -> None:
        """Persist *status* and notify every listener once.

        All alarm transitions go through here.
        """
        _logger.debug("Alarm status -> %s", status)
        self._store.set_alarm_status(status)
        self._listeners.alarm_status_changed(status)

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Arm or disarm the system.

        Disarming clears any alarm. Arming resets every active sensor and,
        when arming at home with a cat last seen on camera, raises the alarm.
        """
        _logger.info("Arming status -> %s", arming_status)
        if arming_status == ArmingStatus.DISARMED:
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        else:
            self._reset_sensors()
            if arming_status == ArmingStatus.ARMED_HOME and self._store.get_cat_detected():
                self.set_alarm_status(AlarmStatus.ALARM)
        self._store.set_arming_status(arming_status)

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Record a sensor toggle and update the alarm status if needed.

        Re-activating an already active sensor may escalate the alarm but
        is not persisted; deactivating an inactive sensor does nothing.
        Sensors the store does not hold are rejected with
        :class:`~pyhomealarm.exceptions.UnknownSensorError` before any rule
        runs.
        """
        if not sensor.active and not active:
            return
        if sensor not in self._store.get_sensors():
            raise UnknownSensorError(f"sensor {sensor.name!r} is not registered", sensor_name=sensor.name)
        if not sensor.active:
            self._handle_sensor_activated()
        elif not active:
            self._handle_sensor_deactivated(sensor)
        else:
            self._handle_active_sensor_activated()
            return
        sensor.set_active(active)
        self._store.update_sensor(sensor)

    def process_image(self, image: Any) -> None:
        """Run cat detection on a camera frame and react to the result."""
        cat = self._detector.image_contains_cat(image, self._cat_confidence_threshold)
        self._store.set_cat_detected(cat)
        if cat and self._store.get_arming_status() == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)
        elif all_sensors_inactive(self._store.get_sensors()):
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        self._listeners.cat_detected(cat)

    def _reset_sensors(self) -> None:
        for sensor in self._store.get_sensors():
            if sensor.active:
                sensor.set_active(False)
                self._store.update_sensor(sensor)
        self._listeners.sensor_status_changed()

    def _handle_sensor_activated(self) -> None:
        if self._store.get_arming_status() == ArmingStatus.DISARMED:
            return
        alarm_status = self._store.get_alarm_status()
        if alarm_status == AlarmStatus.NO_ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            # Snapshot predates this activation, so the triggering sensor still reads inactive.
            if all_sensors_inactive(self._store.get_sensors()):
                self.set_alarm_status(AlarmStatus.ALARM)

    def _handle_sensor_deactivated(self, sensor: Sensor) -> None:
        if self._store.get_alarm_status() != AlarmStatus.PENDING_ALARM:
            return
        if all_sensors_inactive_except(self._store.get_sensors(), sensor):
            self.set_alarm_status(AlarmStatus.NO_ALARM)

    def _handle_active_sensor_activated(self) -> None:
        if self._store.get_alarm_status() == AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.ALARM)
