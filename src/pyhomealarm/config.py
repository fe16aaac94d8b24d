"""Engine configuration for pyhomealarm."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyhomealarm._constants import CAT_CONFIDENCE_THRESHOLD, validate_threshold
from pyhomealarm.exceptions import AlarmConfigError


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise AlarmConfigError(f"{name} must be a number, got {value!r}") from exc


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise AlarmConfigError(f"{name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class AlarmConfig:
    """Engine configuration.

    Parameters
    ----------
    cat_confidence_threshold : float
        Percentage (0-100) passed to the cat detector with every frame.
    state_file : str or None
        Path of the JSON document used by
        :class:`~pyhomealarm.state.file_store.JsonFileSecurityStore`.
        ``None`` keeps all state in memory.
    detector_seed : int or None
        Seed for :class:`~pyhomealarm.detector.FakeCatDetector`, for
        reproducible runs.
    """

    cat_confidence_threshold: float = CAT_CONFIDENCE_THRESHOLD
    state_file: str | None = None
    detector_seed: int | None = None

    def __post_init__(self) -> None:
        try:
            validate_threshold(self.cat_confidence_threshold)
        except (TypeError, ValueError) as exc:
            raise AlarmConfigError(str(exc)) from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> AlarmConfig:
        """Create configuration from environment variables.

        Reads ``ALARM_CAT_CONFIDENCE_THRESHOLD``, ``ALARM_STATE_FILE`` and
        ``ALARM_DETECTOR_SEED``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        threshold_env = env.get("ALARM_CAT_CONFIDENCE_THRESHOLD")
        if threshold_env is not None and "cat_confidence_threshold" not in overrides:
            config_kwargs["cat_confidence_threshold"] = _env_float("ALARM_CAT_CONFIDENCE_THRESHOLD", threshold_env)

        state_file = env.get("ALARM_STATE_FILE")
        if state_file:
            config_kwargs["state_file"] = state_file

        seed_env = env.get("ALARM_DETECTOR_SEED")
        if seed_env is not None and "detector_seed" not in overrides:
            config_kwargs["detector_seed"] = _env_int("ALARM_DETECTOR_SEED", seed_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
