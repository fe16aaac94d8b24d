"""pyhomealarm - Home security alarm state machine with camera cat detection."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyhomealarm")
except PackageNotFoundError:
    __version__ = "0+local"
from pyhomealarm.config import AlarmConfig
from pyhomealarm.detector import CatDetector, FakeCatDetector
from pyhomealarm.engine import AlarmEngine
from pyhomealarm.exceptions import (
    AlarmConfigError,
    AlarmError,
    DetectorError,
    StoreError,
    StorePersistenceError,
    UnknownSensorError,
)
from pyhomealarm.listeners import ListenerRegistry, StatusListener
from pyhomealarm.models import AlarmStatus, ArmingStatus, Sensor, SensorType
from pyhomealarm.state import InMemorySecurityStore, JsonFileSecurityStore, SecurityStore, SystemState

__all__ = [
    "__version__",
    "AlarmConfig",
    "AlarmConfigError",
    "AlarmEngine",
    "AlarmError",
    "AlarmStatus",
    "ArmingStatus",
    "CatDetector",
    "DetectorError",
    "FakeCatDetector",
    "InMemorySecurityStore",
    "JsonFileSecurityStore",
    "ListenerRegistry",
    "SecurityStore",
    "Sensor",
    "SensorType",
    "StatusListener",
    "StoreError",
    "StorePersistenceError",
    "SystemState",
    "UnknownSensorError",
]
