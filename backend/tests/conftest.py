from __future__ import annotations

import asyncio
import time

import numpy as np
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from contextlib import asynccontextmanager, contextmanager

from backend.app.main import create_app
from backend.app.config import AppConfig
from backend.app.dependencies import get_linkograph_service
from backend.app.services.linkograph_service import LinkographService

from linkograph.config.settings import EngineConfig
from linkograph.embeddings.encoder import EmbeddingEncoder
from linkograph.graph.engine import LinkographEngine
from linkograph.similarity.strategy import StrategyResolver


class DummyEncoder(EmbeddingEncoder):
    """
    Deterministic letter-frequency vectors. Identical texts map to
    identical vectors; texts sharing no letters are orthogonal.
    """

    def __init__(self, dimension: int = 26) -> None:
        super().__init__(dimension=dimension)
        self.prepared = 0
        self.extracted: list[str] = []

    async def prepare(self) -> None:
        self.prepared += 1

    def _encode_one(self, text: str) -> np.ndarray:
        self.extracted.append(text)
        vec = np.zeros(self.dimension, dtype=np.float32)
        for ch in text.lower():
            if "a" <= ch <= "z":
                vec[(ord(ch) - ord("a")) % self.dimension] += 1.0
        return vec


class HangingEncoder(DummyEncoder):
    """Backend whose preparation never finishes."""

    async def prepare(self) -> None:
        self.prepared += 1
        await asyncio.Event().wait()


class FailingEncoder(DummyEncoder):
    """Backend whose preparation fails."""

    async def prepare(self) -> None:
        self.prepared += 1
        raise RuntimeError("model download failed")


class FlakyEncoder(DummyEncoder):
    """Becomes ready, then fails on every extraction."""

    def _encode_one(self, text: str) -> np.ndarray:
        raise RuntimeError("backend crashed")


class SlowEncoder(DummyEncoder):
    """Every extraction blocks its worker thread for ``delay_s``."""

    def __init__(self, delay_s: float) -> None:
        super().__init__()
        self.delay_s = delay_s

    def _encode_one(self, text: str) -> np.ndarray:
        time.sleep(self.delay_s)
        return super()._encode_one(text)


class ShiftingEncoder(DummyEncoder):
    """Produces a longer vector for one particular text."""

    def __init__(self, odd_text: str) -> None:
        super().__init__(dimension=None)
        self.odd_text = odd_text

    def _encode_one(self, text: str) -> np.ndarray:
        size = 8 if text == self.odd_text else 4
        return np.ones(size, dtype=np.float32)


FAST = EngineConfig(
    threshold=0.4,
    debounce_ms=20,
    readiness_timeout_ms=50,
    outer_timeout_ms=2000,
)


def make_engine(encoder: EmbeddingEncoder | None, config: EngineConfig = FAST) -> LinkographEngine:
    resolver = StrategyResolver(
        encoder,
        readiness_timeout_s=config.readiness_timeout_s,
    )
    return LinkographEngine(resolver, config=config)


@pytest.fixture()
def engine_config() -> EngineConfig:
    return FAST


@pytest.fixture()
def service() -> LinkographService:
    return LinkographService(engine=make_engine(DummyEncoder()), config=FAST)


@contextmanager
def app_client(service: LinkographService):
    @asynccontextmanager
    async def _no_lifespan(_: FastAPI):
        yield

    app = create_app(AppConfig())
    app.router.lifespan_context = _no_lifespan

    app.dependency_overrides[get_linkograph_service] = lambda: service
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
        service.close()


@pytest.fixture()
def client(service: LinkographService):
    with app_client(service) as test_client:
        yield test_client
