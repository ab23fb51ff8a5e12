from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from sitzprobe.schemas import ReportRead
from sitzprobe.services.reports import ReportAggregator, build_report_from_aggregator

router = APIRouter(prefix="/report", tags=["report"])


def get_aggregator(request: Request) -> ReportAggregator:
    """
    FastAPI dependency returning the aggregator owned by the running agent.

    The app factory stores it on `app.state`; nothing here ever writes to it.
    """
    return request.app.state.aggregator


@router.get("", response_model=ReportRead)
def read_report(aggregator: ReportAggregator = Depends(get_aggregator)) -> ReportRead:
    return ReportRead(**build_report_from_aggregator(aggregator))
