import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.app.config import AppConfig
from backend.app.api.routes_linkograph import router as linkograph_router
from backend.app.api.routes_graph import router as graph_router
from backend.app.dependencies import get_linkograph_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle hooks.

    Starts the embedding readiness probe in the background so the
    first analysis does not pay for model loading, and stops any
    pending debounced work at shutdown.
    """
    service = get_linkograph_service()
    probe = asyncio.create_task(service.start())

    yield

    probe.cancel()
    await asyncio.gather(probe, return_exceptions=True)
    service.close()


def create_app(config: AppConfig) -> FastAPI:
    app = FastAPI(
        title=config.app_name,
        lifespan=lifespan,
    )

    app.include_router(
        linkograph_router,
        prefix=f"{config.api_prefix}/linkograph",
        tags=["linkograph"],
    )

    app.include_router(
        graph_router,
        prefix=f"{config.api_prefix}/graph",
        tags=["graph"],
    )

    return app


config = AppConfig()
app = create_app(config)
