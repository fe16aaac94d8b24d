"""Cat detector contract and a random stand-in implementation."""

from __future__ import annotations

import logging
import random
from typing import Any, Protocol

from pyhomealarm._constants import validate_threshold

_logger = logging.getLogger(__name__)


class CatDetector(Protocol):
    """Structural image-analysis interface used by the engine.

    Implementations answer whether *image* contains a cat with at least
    *confidence_threshold* percent confidence. Failures should raise
    :class:`~pyhomealarm.exceptions.DetectorError`.
    """

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool: ...


class FakeCatDetector:
    """Detector that ignores the image and flips a coin.

    Useful for demos and for wiring up a system before a real classifier is
    available. Pass *seed* for a reproducible sequence of answers.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        validate_threshold(confidence_threshold)
        result = self._random.random() < 0.5
        _logger.debug("Fake detector answered %s (threshold %.1f%%)", result, confidence_threshold)
        return result
