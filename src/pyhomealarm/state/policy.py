"""Pure predicates over sensor snapshots.

Nothing here reads from or writes to a store; the engine passes in the
snapshot it just read.
"""

from __future__ import annotations

from collections.abc import Iterable

from pyhomealarm.models.sensor import Sensor


def all_sensors_inactive(sensors: Iterable[Sensor]) -> bool:
    """``True`` when no sensor in *sensors* is active (vacuously for none)."""
    return not any(sensor.active for sensor in sensors)


def all_sensors_inactive_except(sensors: Iterable[Sensor], excluded: Sensor) -> bool:
    """Like :func:`all_sensors_inactive`, ignoring whichever entry equals *excluded*."""
    # Equality is by (name, type), so a stale copy of *excluded* is skipped too.
    return all_sensors_inactive(sensor for sensor in sensors if sensor != excluded)
