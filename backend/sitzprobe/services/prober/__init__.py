# backend/sitzprobe/services/prober/__init__.py
from __future__ import annotations

"""
Probe building blocks used by the scheduler.

This package provides:
- select_active_channel: pick a random usable target (selector.py)
- ProbeDispatcher: route, send and wait on one probe payment (dispatcher.py)
"""

from .dispatcher import ProbeDispatcher, new_payment_handle  # noqa: F401
from .selector import select_active_channel  # noqa: F401
