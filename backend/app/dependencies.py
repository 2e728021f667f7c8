from functools import lru_cache
import logging
from typing import Optional

from linkograph.embeddings.encoder import EmbeddingEncoder
from linkograph.graph.engine import LinkographEngine
from linkograph.similarity.strategy import StrategyResolver

from backend.app.config import AppConfig
from backend.app.services.linkograph_service import LinkographService


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()


@lru_cache
def get_embedding_encoder() -> Optional[EmbeddingEncoder]:
    config = get_config()
    if not config.semantic_enabled:
        logging.getLogger("linkograph.startup").info(
            "[startup] semantic scoring disabled; lexical only"
        )
        return None

    # Imported here so lexical-only deployments never load torch.
    from linkograph.embeddings.hf_encoder import HuggingFaceEmbeddingEncoder

    embedding = config.linkograph.embedding
    return HuggingFaceEmbeddingEncoder(
        model_name=embedding.model_name,
        device=embedding.device,
        normalize=embedding.normalize,
        dimension=embedding.dimension,
        cache=config.linkograph.engine.cache_embeddings,
    )


@lru_cache
def get_linkograph_service() -> LinkographService:
    config = get_config()
    engine_config = config.linkograph.engine

    resolver = StrategyResolver(
        get_embedding_encoder(),
        readiness_timeout_s=engine_config.readiness_timeout_s,
    )
    engine = LinkographEngine(resolver, config=engine_config)
    return LinkographService(engine=engine, config=engine_config)
