# backend/sitzprobe/__init__.py
from __future__ import annotations

"""
Marks `sitzprobe` as a Python package.

Config lives in sitzprobe/config, the probe engine in sitzprobe/services,
the HTTP surface in sitzprobe/api and the lightningd entrypoint in
sitzprobe/plugin.py.
"""

__version__ = "0.1.0"
