from __future__ import annotations

"""backend/sitzprobe/services/host/base.py

Interface between the probe engine and the node it is attached to.

This module provides:

- HostError and its subclasses: typed failures for each host call
- HostNodeProtocol: the four calls the engine needs from a node

Concrete adapters (the pyln-client one in ``lightning.py``, the scripted
fake used by tests) satisfy the protocol. The engine never talks RPC
directly, so the wire framing stays the adapter's concern.
"""

from typing import List, Protocol

from sitzprobe.models import Channel, PaymentResult, Route


class HostError(Exception):
    """Base class for failures reported by the host node."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ChannelsUnavailable(HostError):
    """Listing channels failed at the host."""


class NoRouteFound(HostError):
    """The host could not compute a route to the destination."""


class SendPayFailed(HostError):
    """The host rejected the payment submission itself."""


class HostNodeProtocol(Protocol):
    """Minimal interface that host adapters must implement."""

    def list_channels(self) -> List[Channel]:
        """Return the channels currently known to the node.

        Raises:
            ChannelsUnavailable: if the call itself errors.
        """
        ...

    def get_route(self, destination: str, amount_msat: int, max_hops: int) -> Route:
        """Ask the node for a route carrying `amount_msat` to `destination`.

        Raises:
            NoRouteFound: if no path exists within `max_hops`.
        """
        ...

    def send_payment(self, route: Route, payment_handle: str) -> None:
        """Submit a payment along `route` keyed by `payment_handle`.

        Raises:
            SendPayFailed: if the submission is rejected.
        """
        ...

    def wait_payment_result(self, payment_handle: str) -> PaymentResult:
        """Block, with no timeout, until the payment reaches a terminal state."""
        ...
