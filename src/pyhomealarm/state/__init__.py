"""State/store layer.

Stores are the single place alarm, arming, cat-detection and sensor state
lives. The engine reads a fresh snapshot for every decision and writes the
outcome back through the :class:`SecurityStore` protocol.
"""

from pyhomealarm.state.file_store import JsonFileSecurityStore
from pyhomealarm.state.store import InMemorySecurityStore, SecurityStore, SystemState

__all__ = [
    "InMemorySecurityStore",
    "JsonFileSecurityStore",
    "SecurityStore",
    "SystemState",
]
