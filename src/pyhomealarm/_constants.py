"""Internal constants shared across the library."""

#: Minimum confidence (percent) a detector must report before a frame counts as containing a cat.
CAT_CONFIDENCE_THRESHOLD: float = 50.0

_THRESHOLD_MIN = 0.0
_THRESHOLD_MAX = 100.0


def validate_threshold(threshold: float) -> float:
    """Return *threshold* as a float percentage.

    Raises :class:`ValueError` if it is outside 0-100.
    """
    value = float(threshold)
    if not _THRESHOLD_MIN <= value <= _THRESHOLD_MAX:
        raise ValueError(f"confidence threshold must be between {_THRESHOLD_MIN} and {_THRESHOLD_MAX}, got {value}")
    return value
