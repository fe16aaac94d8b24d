"""Sensor model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyhomealarm.models.status import SensorType


class Sensor(BaseModel):
    """A single door, window or motion sensor.

    Sensors compare and hash by ``(name, sensor_type)`` so that a copy read
    back from a store is the same sensor as the instance a caller holds,
    whatever their ``active`` flags say.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    name: str = Field(frozen=True)
    """Display name, unique per sensor type. Fixed once created, like the type."""
    sensor_type: SensorType = Field(frozen=True)
    active: bool = Field(default=False)
    """Whether the sensor currently reports a violation."""

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value:
            raise ValueError("sensor name must be non-empty")
        return value

    @property
    def key(self) -> tuple[str, SensorType]:
        return (self.name, self.sensor_type)

    def set_active(self, active: bool) -> None:
        self.active = active

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)
