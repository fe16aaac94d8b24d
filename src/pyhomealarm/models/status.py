"""Alarm, arming and sensor type enums."""

from __future__ import annotations

from enum import StrEnum


class AlarmStatus(StrEnum):
    """Overall alarm state held by the store."""

    NO_ALARM = "NO_ALARM"
    PENDING_ALARM = "PENDING_ALARM"
    ALARM = "ALARM"

    @property
    def description(self) -> str:
        return _ALARM_DESCRIPTIONS[self]


class ArmingStatus(StrEnum):
    """Whether the system is monitoring sensors and camera frames."""

    DISARMED = "DISARMED"
    ARMED_HOME = "ARMED_HOME"
    ARMED_AWAY = "ARMED_AWAY"

    @property
    def description(self) -> str:
        return _ARMING_DESCRIPTIONS[self]

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


class SensorType(StrEnum):
    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"


_ALARM_DESCRIPTIONS: dict[AlarmStatus, str] = {
    AlarmStatus.NO_ALARM: "No alarm",
    AlarmStatus.PENDING_ALARM: "Pending alarm",
    AlarmStatus.ALARM: "Alarm!",
}

_ARMING_DESCRIPTIONS: dict[ArmingStatus, str] = {
    ArmingStatus.DISARMED: "Disarmed",
    ArmingStatus.ARMED_HOME: "Armed - At Home",
    ArmingStatus.ARMED_AWAY: "Armed - Away",
}
