"""Store that mirrors every mutation into a JSON document."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from pyhomealarm.exceptions import StorePersistenceError
from pyhomealarm.state.store import InMemorySecurityStore, SystemState

_logger = logging.getLogger(__name__)


def _load_state(path: Path) -> SystemState:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        _logger.warning("Could not read state file %s: %s", path, exc)
        raise StorePersistenceError(f"could not read {path}", path=str(path)) from exc
    try:
        return SystemState.model_validate_json(text)
    except ValidationError as exc:
        _logger.warning("State file %s is malformed", path)
        raise StorePersistenceError(f"malformed state document in {path}", path=str(path)) from exc


class JsonFileSecurityStore(InMemorySecurityStore):
    """In-memory store that rewrites *path* after each mutation.

    The document is written to a sibling temporary file and moved into
    place, so a crash mid-write leaves the previous document intact. A
    missing file starts from the default :class:`SystemState`.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        state = _load_state(self._path) if self._path.exists() else None
        super().__init__(state)

    @property
    def path(self) -> Path:
        return self._path

    def _changed(self) -> None:
        payload = self._state.model_dump_json(indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            _logger.warning("Could not write state file %s: %s", self._path, exc)
            raise StorePersistenceError(f"could not write {self._path}", path=str(self._path)) from exc
