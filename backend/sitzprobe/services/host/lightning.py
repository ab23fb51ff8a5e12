from __future__ import annotations

"""backend/sitzprobe/services/host/lightning.py

Adapter that exposes a Core Lightning node through HostNodeProtocol.

It wraps any pyln-client RPC object (``plugin.rpc`` inside lightningd, or a
standalone ``LightningRpc(socket_path)``) and maps:

- listchannels   -> list_channels       (call error -> ChannelsUnavailable)
- getroute       -> get_route           (call error / empty route -> NoRouteFound)
- sendpay        -> send_payment        (call error -> SendPayFailed)
- waitsendpay    -> wait_payment_result (call error -> failed PaymentResult)

A call error is an RpcError, an OSError from the lightningd socket, or a
ValueError from a malformed reply.

Failure text is taken from the RPC error's ``message`` field. The full
``str(RpcError)`` starts with "RPC call failed", whose uppercase prefix would
otherwise be picked up as the failure code.
"""

import logging
from typing import Any, List

from pyln.client import RpcError

from sitzprobe.models import Channel, PaymentResult, Route
from sitzprobe.services.host.base import ChannelsUnavailable, NoRouteFound, SendPayFailed

logger = logging.getLogger(__name__)

# RpcError for errors lightningd reports, OSError for an unreachable socket,
# ValueError for replies that fail to decode.
HOST_CALL_ERRORS = (RpcError, OSError, ValueError)


def rpc_error_message(exc: Exception) -> str:
    """Best-effort human message for a failed RPC call.

    Uses the `message` field of a pyln RpcError, else the exception text.
    """
    error = getattr(exc, "error", None)
    if isinstance(error, dict):
        message = error.get("message")
        if message:
            return str(message)
    if error:
        return str(error)
    return str(exc)


class LightningHost:
    """HostNodeProtocol implementation backed by a pyln-client RPC object."""

    def __init__(self, rpc: Any, *, riskfactor: int = 1) -> None:
        self.rpc = rpc
        self.riskfactor = riskfactor

    def list_channels(self) -> List[Channel]:
        try:
            result = self.rpc.listchannels()
        except HOST_CALL_ERRORS as exc:
            raise ChannelsUnavailable(rpc_error_message(exc)) from exc

        channels: List[Channel] = []
        for raw in result.get("channels", []) or []:
            destination = raw.get("destination")
            if not destination:
                continue
            channels.append(
                Channel(
                    destination=destination,
                    active=bool(raw.get("active", False)),
                    short_channel_id=raw.get("short_channel_id"),
                )
            )
        return channels

    def get_route(self, destination: str, amount_msat: int, max_hops: int) -> Route:
        payload = {
            "id": destination,
            "amount_msat": amount_msat,
            "riskfactor": self.riskfactor,
            "maxhops": max_hops,
        }
        try:
            result = self.rpc.call("getroute", payload)
        except HOST_CALL_ERRORS as exc:
            raise NoRouteFound(rpc_error_message(exc)) from exc

        hops = result.get("route") or []
        if not hops:
            raise NoRouteFound(f"empty route to {destination}")
        return Route(destination=destination, amount_msat=amount_msat, hops=list(hops))

    def send_payment(self, route: Route, payment_handle: str) -> None:
        try:
            self.rpc.sendpay(route.hops, payment_handle)
        except HOST_CALL_ERRORS as exc:
            raise SendPayFailed(rpc_error_message(exc)) from exc

    def wait_payment_result(self, payment_handle: str) -> PaymentResult:
        try:
            result = self.rpc.waitsendpay(payment_handle)
        except HOST_CALL_ERRORS as exc:
            return PaymentResult(succeeded=False, failure_message=rpc_error_message(exc))

        logger.debug("waitsendpay returned status=%s", result.get("status"))
        return PaymentResult(succeeded=True, destination=result.get("destination"))
