from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Iterable, List, Dict, Optional
import numpy as np

from linkograph.errors import DimensionMismatch
from linkograph.utils.text import hash_text


class EmbeddingEncoder(ABC):
    """
    Abstract embedding backend.

    Concrete implementations may wrap:
    - sentence transformers
    - embedding APIs
    - deterministic test encoders

    The async surface (``prepare`` / ``extract``) is what the similarity
    strategy consumes. Blocking work runs in worker threads so the event
    loop can race it against a timer.
    """

    def __init__(
        self,
        dimension: Optional[int] = None,
        *,
        cache: bool = True,
    ) -> None:
        self.dimension = dimension
        self.cache_enabled = cache
        self._cache: Dict[str, np.ndarray] = {}

    # ------------------------------------------------------------------
    # Async API
    # ------------------------------------------------------------------

    async def prepare(self) -> None:
        """
        Make the backend ready (download / initialize a model).
        May take an unbounded amount of time, or fail.
        """
        await asyncio.to_thread(self._load)

    async def extract(self, text: str) -> np.ndarray:
        """
        Extract a fixed-dimension vector for one text.
        """
        key = self._hash(text)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        vec = await asyncio.to_thread(self._encode_one, text)
        return self._remember(key, vec)

    # ------------------------------------------------------------------
    # Sync API
    # ------------------------------------------------------------------

    def encode(self, texts: Iterable[str]) -> List[np.ndarray]:
        """
        Encode multiple texts into embeddings.

        Uses deterministic caching to avoid recomputation.
        """
        embeddings: List[np.ndarray] = []

        for text in texts:
            key = self._hash(text)
            cached = self._cache.get(key)
            if cached is None:
                cached = self._remember(key, self._encode_one(text))
            embeddings.append(cached)

        return embeddings

    def encode_one(self, text: str) -> np.ndarray:
        return self.encode([text])[0]

    def clear_cache(self) -> None:
        self._cache.clear()

    def retain(self, texts: Iterable[str]) -> int:
        """
        Drop cached vectors for every text not in ``texts``.
        Returns the number of evicted entries.
        """
        keep = {self._hash(t) for t in texts}
        before = len(self._cache)
        if not keep:
            self.clear_cache()
            return before
        self._cache = {k: v for k, v in self._cache.items() if k in keep}
        return before - len(self._cache)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    # ------------------------------------------------------------------
    # Implementation contract
    # ------------------------------------------------------------------

    def _load(self) -> None:
        """
        Blocking initialization hook. Nothing to load by default.
        """

    @abstractmethod
    def _encode_one(self, text: str) -> np.ndarray:
        """
        Encode a single text into a vector.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    @property
    def identity(self) -> str:
        return self.__class__.__name__

    def _remember(self, key: str, vec: np.ndarray) -> np.ndarray:
        vec = np.asarray(vec, dtype=np.float32).reshape(-1)
        self._check_dimension(vec)
        if self.cache_enabled:
            self._cache[key] = vec
        return vec

    def _check_dimension(self, vec: np.ndarray) -> None:
        actual = int(vec.shape[0])
        if self.dimension is None:
            self.dimension = actual
        elif actual != self.dimension:
            raise DimensionMismatch(self.dimension, actual)

    def _hash(self, text: str) -> str:
        """
        Stable cache key incorporating encoder identity.
        Prevents silent reuse across different models/configs.
        """
        return hash_text(text, namespace=self.identity)
