from __future__ import annotations

"""backend/sitzprobe/services/prober/dispatcher.py

Sends a single probe payment and waits for it to resolve.

Steps:
1. ask the host for a route (bounded by max_hops)
2. generate a fresh random payment handle
3. submit the payment along the route
4. block until the host reports a terminal state

The payment handle is 32 random bytes, hex-encoded. It is not the hash of
any preimage we hold, so the destination can never settle it and the probe
is expected to come back as WIRE_INCORRECT_OR_UNKNOWN_PAYMENT_DETAILS.
There is deliberately no timeout on step 4.
"""

import random

from sitzprobe.config.settings import DEFAULT_MAX_HOPS
from sitzprobe.models import DispatchResult, DispatchStatus, Outcome, ProbeAttempt
from sitzprobe.services.host.base import HostNodeProtocol, NoRouteFound, SendPayFailed

PAYMENT_HANDLE_BYTES = 32


def new_payment_handle(rng: random.Random) -> str:
    return rng.randbytes(PAYMENT_HANDLE_BYTES).hex()


class ProbeDispatcher:
    """Route + send + wait for one probe payment."""

    def __init__(
        self,
        host: HostNodeProtocol,
        *,
        amount_msat: int,
        rng: random.Random,
        max_hops: int = DEFAULT_MAX_HOPS,
    ) -> None:
        self.host = host
        self.amount_msat = amount_msat
        self.max_hops = max_hops
        self.rng = rng

    def probe(self, destination: str) -> DispatchResult:
        try:
            route = self.host.get_route(destination, self.amount_msat, self.max_hops)
        except NoRouteFound as exc:
            return DispatchResult.aborted(Outcome.NO_ROUTE_FOUND, detail=exc.message)

        attempt = ProbeAttempt(
            payment_handle=new_payment_handle(self.rng),
            route=route,
            amount_msat=self.amount_msat,
        )

        try:
            self.host.send_payment(attempt.route, attempt.payment_handle)
        except SendPayFailed as exc:
            return DispatchResult.aborted(
                Outcome.SENDPAY_CALL_FAILED, detail=exc.message, attempt=attempt
            )

        result = self.host.wait_payment_result(attempt.payment_handle)
        if result.succeeded:
            return DispatchResult(
                status=DispatchStatus.SUCCEEDED,
                outcome=Outcome.SUCCESS,
                attempt=attempt,
                detail=result.destination,
            )
        return DispatchResult(
            status=DispatchStatus.PAYMENT_FAILED,
            failure_message=result.failure_message or "",
            attempt=attempt,
        )
