from __future__ import annotations

import json
from pathlib import Path

import pytest

from pyhomealarm.exceptions import StorePersistenceError, UnknownSensorError
from pyhomealarm.models.sensor import Sensor
from pyhomealarm.models.status import AlarmStatus, ArmingStatus, SensorType
from pyhomealarm.state.file_store import JsonFileSecurityStore
from pyhomealarm.state.policy import all_sensors_inactive, all_sensors_inactive_except
from pyhomealarm.state.store import InMemorySecurityStore


def _door(active: bool = False) -> Sensor:
    return Sensor(name="Front door", sensor_type=SensorType.DOOR, active=active)


def _window(active: bool = False) -> Sensor:
    return Sensor(name="Kitchen window", sensor_type=SensorType.WINDOW, active=active)


def test_defaults() -> None:
    store = InMemorySecurityStore()

    assert store.get_sensors() == set()
    assert store.get_alarm_status() == AlarmStatus.NO_ALARM
    assert store.get_arming_status() == ArmingStatus.DISARMED
    assert store.get_cat_detected() is False


def test_get_sensors_returns_snapshot() -> None:
    store = InMemorySecurityStore()
    store.add_sensor(_door())

    (sensor,) = store.get_sensors()
    sensor.set_active(True)

    # Not persisted until update_sensor is called.
    assert next(iter(store.get_sensors())).active is False
    store.update_sensor(sensor)
    assert next(iter(store.get_sensors())).active is True


def test_add_sensor_copies_caller_instance() -> None:
    store = InMemorySecurityStore()
    door = _door()
    store.add_sensor(door)

    door.set_active(True)

    assert next(iter(store.get_sensors())).active is False


def test_adding_same_sensor_twice_replaces_it() -> None:
    store = InMemorySecurityStore()
    store.add_sensor(_door())
    store.add_sensor(_door(active=True))

    sensors = store.get_sensors()
    assert len(sensors) == 1
    assert next(iter(sensors)).active is True


def test_remove_sensor() -> None:
    store = InMemorySecurityStore()
    store.add_sensor(_door())
    store.add_sensor(_window())

    store.remove_sensor(_door())

    assert store.get_sensors() == {_window()}


def test_unknown_sensor_rejected() -> None:
    store = InMemorySecurityStore()

    with pytest.raises(UnknownSensorError) as exc_info:
        store.update_sensor(_door())
    assert exc_info.value.sensor_name == "Front door"

    with pytest.raises(UnknownSensorError):
        store.remove_sensor(_door())


def test_status_setters() -> None:
    store = InMemorySecurityStore()

    store.set_alarm_status(AlarmStatus.PENDING_ALARM)
    store.set_arming_status(ArmingStatus.ARMED_AWAY)
    store.set_cat_detected(True)

    snapshot = store.snapshot()
    assert snapshot.alarm_status == AlarmStatus.PENDING_ALARM
    assert snapshot.arming_status == ArmingStatus.ARMED_AWAY
    assert snapshot.cat_detected is True


# ------------------------------------------------------------------
# JSON file store
# ------------------------------------------------------------------


def test_file_store_survives_reopen(tmp_path: Path) -> None:
    path = tmp_path / "alarm" / "state.json"
    store = JsonFileSecurityStore(path)
    store.add_sensor(_door())
    store.update_sensor(_door(active=True))
    store.set_arming_status(ArmingStatus.ARMED_HOME)
    store.set_alarm_status(AlarmStatus.ALARM)
    store.set_cat_detected(True)

    reopened = JsonFileSecurityStore(path)

    assert reopened.get_sensors() == {_door()}
    assert next(iter(reopened.get_sensors())).active is True
    assert reopened.get_arming_status() == ArmingStatus.ARMED_HOME
    assert reopened.get_alarm_status() == AlarmStatus.ALARM
    assert reopened.get_cat_detected() is True


def test_file_store_writes_readable_json(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    store = JsonFileSecurityStore(path)
    store.set_arming_status(ArmingStatus.ARMED_AWAY)

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["arming_status"] == "ARMED_AWAY"
    assert document["sensors"] == []
    assert not path.with_name("state.json.tmp").exists()


def test_file_store_missing_file_starts_empty(tmp_path: Path) -> None:
    store = JsonFileSecurityStore(tmp_path / "absent.json")

    assert store.get_sensors() == set()
    assert not store.path.exists()


def test_file_store_rejects_malformed_document(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text('{"alarm_status": "ON_FIRE"}', encoding="utf-8")

    with pytest.raises(StorePersistenceError) as exc_info:
        JsonFileSecurityStore(path)
    assert exc_info.value.path == str(path)


def test_file_store_write_failure_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = JsonFileSecurityStore(tmp_path / "state.json")

    def _fail(*_args: object, **_kwargs: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr("pyhomealarm.state.file_store.os.replace", _fail)

    with pytest.raises(StorePersistenceError):
        store.set_cat_detected(True)

    assert store.get_cat_detected() is False


def test_file_store_failed_write_keeps_previous_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "state.json"
    store = JsonFileSecurityStore(path)
    store.add_sensor(_door())
    store.set_alarm_status(AlarmStatus.PENDING_ALARM)

    def _fail(*_args: object, **_kwargs: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr("pyhomealarm.state.file_store.os.replace", _fail)

    with pytest.raises(StorePersistenceError):
        store.set_alarm_status(AlarmStatus.ALARM)
    with pytest.raises(StorePersistenceError):
        store.update_sensor(_door(active=True))
    with pytest.raises(StorePersistenceError):
        store.remove_sensor(_door())

    assert store.get_alarm_status() == AlarmStatus.PENDING_ALARM
    assert store.get_sensors() == {_door()}
    assert next(iter(store.get_sensors())).active is False

    monkeypatch.undo()
    reopened = JsonFileSecurityStore(path)
    assert reopened.snapshot() == store.snapshot()


# ------------------------------------------------------------------
# Policy predicates
# ------------------------------------------------------------------


def test_all_sensors_inactive() -> None:
    assert all_sensors_inactive([])
    assert all_sensors_inactive([_door(), _window()])
    assert not all_sensors_inactive([_door(), _window(active=True)])


def test_all_sensors_inactive_except_skips_equal_sensor() -> None:
    sensors = [_door(active=True), _window()]

    assert all_sensors_inactive_except(sensors, _door())
    assert not all_sensors_inactive_except(sensors, _window())
