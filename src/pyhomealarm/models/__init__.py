"""Data models for pyhomealarm."""

from pyhomealarm.models.sensor import Sensor
from pyhomealarm.models.status import AlarmStatus, ArmingStatus, SensorType

__all__ = [
    "AlarmStatus",
    "ArmingStatus",
    "Sensor",
    "SensorType",
]
