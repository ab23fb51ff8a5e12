# backend/sitzprobe/services/host/__init__.py
from __future__ import annotations

"""
Host node integration.

This package provides:
- HostNodeProtocol and the typed HostError family (base.py)
- LightningHost, the pyln-client backed adapter (lightning.py)

The probe engine depends only on base.py; LightningHost is wired in by the
plugin entrypoint.
"""

from .base import (  # noqa: F401
    ChannelsUnavailable,
    HostError,
    HostNodeProtocol,
    NoRouteFound,
    SendPayFailed,
)
