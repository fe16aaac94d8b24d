"""Custom exception hierarchy for pyhomealarm."""

from __future__ import annotations


class AlarmError(Exception):
    """Base exception for all pyhomealarm errors."""


class AlarmConfigError(AlarmError):
    """Invalid or missing configuration."""


class StoreError(AlarmError):
    """A security store could not complete a read or write."""


class StorePersistenceError(StoreError):
    """The backing state document could not be read or written."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class UnknownSensorError(StoreError):
    """A sensor was updated or removed without having been added first."""

    def __init__(self, message: str, *, sensor_name: str = "") -> None:
        self.sensor_name = sensor_name
        super().__init__(message)


class DetectorError(AlarmError):
    """Image analysis failed.

    Detector implementations raise this; the engine lets it propagate to
    the caller of ``process_image`` untouched.
    """
