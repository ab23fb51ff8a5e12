# backend/sitzprobe/services/prober/selector.py
from __future__ import annotations

"""
Random target selection.

Draws channels uniformly at random (with replacement) until an active one
turns up, giving up after `max_draws` attempts. This tolerates a low ratio
of active channels without walking the whole list, and accepts a small
chance of reporting "none found" when active channels are very sparse.
"""

import random
from typing import Optional, Sequence

from sitzprobe.config.settings import DEFAULT_MAX_CHANNEL_DRAWS
from sitzprobe.models import Channel


def select_active_channel(
    channels: Sequence[Channel],
    rng: random.Random,
    max_draws: int = DEFAULT_MAX_CHANNEL_DRAWS,
) -> Optional[Channel]:
    """Return a random active channel, or None if none turned up within `max_draws`."""
    if not channels:
        return None

    for _ in range(max_draws):
        channel = channels[rng.randrange(len(channels))]
        if channel.active:
            return channel
    return None
