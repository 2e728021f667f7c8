import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from linkograph.errors import DimensionMismatch

from backend.app.api.schemas import (
    AnalyzeRequest,
    EditAccepted,
    EditRequest,
    LinkographResponse,
    MetricsResponse,
    StatusResponse,
)
from backend.app.dependencies import get_linkograph_service
from backend.app.services.linkograph_service import LinkographService

router = APIRouter()


@router.post("/", response_model=LinkographResponse)
async def analyze(
    request: AnalyzeRequest,
    service: LinkographService = Depends(get_linkograph_service),
):
    try:
        return await service.analyze(request.text, request.threshold)
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="linkograph analysis timed out")
    except DimensionMismatch as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/edits", response_model=EditAccepted, status_code=202)
async def submit_edit(
    request: EditRequest,
    service: LinkographService = Depends(get_linkograph_service),
):
    return service.submit(request.text)


@router.get("/", response_model=LinkographResponse)
async def current(
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
    service: LinkographService = Depends(get_linkograph_service),
):
    return service.view(threshold)


@router.get("/metrics", response_model=MetricsResponse)
async def metrics(
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
    service: LinkographService = Depends(get_linkograph_service),
):
    return service.metrics_view(threshold)


@router.get("/status", response_model=StatusResponse)
async def status(service: LinkographService = Depends(get_linkograph_service)):
    return service.status()
