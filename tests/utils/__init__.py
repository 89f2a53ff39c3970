"""Shared test helpers.

Focused modules:
- fakes.py: in-memory websocket and scripted completion provider
- settings.py: AppSettings builder that skips the config file
- relays.py: waiting for detached relay tasks
"""

from __future__ import annotations

from .settings import make_settings
from .relays import wait_for_relays
from .fakes import FakeProvider, FakeWebSocket

__all__ = ["FakeProvider", "FakeWebSocket", "make_settings", "wait_for_relays"]
