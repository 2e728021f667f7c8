from typing import List, Optional
from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    text: str
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class EditRequest(BaseModel):
    text: str


class EditAccepted(BaseModel):
    accepted: bool
    generation: int
    debounce_ms: float


class MoveOut(BaseModel):
    index: int
    text: str


class LinkOut(BaseModel):
    later: int
    earlier: int
    score: float


class ActiveLinkOut(LinkOut):
    weight: float


class EntropyOut(BaseModel):
    forelink: float
    backlink: float
    horizonlink: float
    total: float


class MetricsResponse(BaseModel):
    threshold: float
    move_count: int
    possible_links: int
    active_link_count: int
    link_density_index: float
    entropy: EntropyOut


class LinkographResponse(BaseModel):
    generation: int
    strategy: str
    status: str
    pending: bool
    superseded: bool = False
    threshold: float
    moves: List[MoveOut]
    links: List[LinkOut]
    active_links: List[ActiveLinkOut]
    metrics: MetricsResponse


class StatusResponse(BaseModel):
    status: str
    strategy: str
    probe: Optional[str] = None
    probe_elapsed_s: Optional[float] = None
    last_error: Optional[str] = None


class GraphStatsResponse(BaseModel):
    nodes: int
    edges: int
    metadata: dict


class GraphNode(BaseModel):
    index: int
    text: str
    degree: int


class GraphEdge(BaseModel):
    later: int
    earlier: int
    score: float
    weight: float


class GraphExportResponse(BaseModel):
    nodes: List[GraphNode]
    edges: List[GraphEdge]
