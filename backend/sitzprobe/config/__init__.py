# backend/sitzprobe/config/__init__.py
from __future__ import annotations

"""
Shortcut imports for configuration.
"""

from .settings import Settings, get_settings, parse_amount, parse_interval  # noqa: F401
