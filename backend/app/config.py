from dataclasses import dataclass
from dynaconf import Dynaconf
from backend.app.constants import DEFAULTS

from linkograph.config.settings import (
    EngineConfig,
    EmbeddingConfig,
    LinkographConfig,
)

settings = Dynaconf(
    envvar_prefix="LINKOGRAPH",
    load_dotenv=True,
    settings_files=[],
)


def _setting(name: str):
    return settings.get(name, DEFAULTS[name])


def _optional_int(value):
    if value in (None, "", "none", "None"):
        return None
    return int(value)


@dataclass(frozen=True)
class AppConfig:
    # ---------------- App ----------------
    app_name: str = settings.get("APP_NAME", "linkograph-backend")
    api_prefix: str = settings.get("API_PREFIX", "")

    # ---------------- Backend selection ----------------
    semantic_enabled: bool = _setting("SEMANTIC_ENABLED")

    # ---------------- Linkograph Policy ----------------
    linkograph: LinkographConfig = LinkographConfig(
        engine=EngineConfig(
            threshold=float(_setting("THRESHOLD")),
            debounce_ms=float(_setting("DEBOUNCE_MS")),
            readiness_timeout_ms=float(_setting("READINESS_TIMEOUT_MS")),
            outer_timeout_ms=float(_setting("OUTER_TIMEOUT_MS")),
            cache_embeddings=bool(_setting("CACHE_EMBEDDINGS")),
        ),
        embedding=EmbeddingConfig(
            model_name=_setting("EMBEDDING_MODEL"),
            device=_setting("EMBEDDING_DEVICE"),
            normalize=bool(_setting("EMBEDDING_NORMALIZE")),
            dimension=_optional_int(_setting("EMBEDDING_DIMENSION")),
        ),
    )
