from typing import Optional

from fastapi import APIRouter, Depends, Query

from backend.app.api.schemas import GraphStatsResponse, GraphExportResponse
from backend.app.dependencies import get_linkograph_service
from backend.app.services.linkograph_service import LinkographService

router = APIRouter()


@router.get("/stats", response_model=GraphStatsResponse)
async def graph_stats(
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
    service: LinkographService = Depends(get_linkograph_service),
):
    graph = service.graph(threshold)
    return GraphStatsResponse(
        nodes=graph.node_count(),
        edges=graph.edge_count(),
        metadata=graph.metadata,
    )


@router.get("/export", response_model=GraphExportResponse)
async def graph_export(
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
    service: LinkographService = Depends(get_linkograph_service),
):
    return service.graph(threshold).export()
