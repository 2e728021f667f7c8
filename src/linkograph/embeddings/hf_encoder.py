from __future__ import annotations

import logging
import threading
import time
from typing import Optional

import numpy as np
import torch
from transformers import AutoTokenizer, AutoModel

from linkograph.embeddings.encoder import EmbeddingEncoder


class HuggingFaceEmbeddingEncoder(EmbeddingEncoder):
    """
    HuggingFace-based sentence embedding encoder.

    This encoder:
    - loads lazily, inside ``prepare`` (the operation raced against
      the readiness timer)
    - uses mean pooling over token embeddings
    - is deterministic
    """

    def __init__(
        self,
        *,
        model_name: str,
        device: str = "cpu",
        normalize: bool = True,
        dimension: Optional[int] = None,
        cache: bool = True,
    ) -> None:
        super().__init__(dimension=dimension, cache=cache)
        self.model_name = model_name
        self.device = device
        self.normalize = normalize

        self.tokenizer = None
        self.model = None
        self._lock = threading.Lock()

    @property
    def identity(self) -> str:
        return f"{self.__class__.__name__}:{self.model_name}"

    # ------------------------------------------------------------------
    # Implementation
    # ------------------------------------------------------------------

    def _load(self) -> None:
        with self._lock:
            if self.model is not None:
                return

            t0 = time.perf_counter()
            tokenizer = AutoTokenizer.from_pretrained(self.model_name)
            model = AutoModel.from_pretrained(self.model_name)

            model.to(self.device)
            model.eval()

            # Infer embedding dimension dynamically
            with torch.no_grad():
                dummy = tokenizer("test", return_tensors="pt").to(self.device)
                out = model(**dummy)
                dim = int(out.last_hidden_state.shape[-1])

            self.tokenizer = tokenizer
            self.model = model

        self._check_dimension(np.zeros(dim, dtype=np.float32))
        logging.getLogger("linkograph.embeddings").info(
            "loaded %s on %s (dim=%s) in %.3fs",
            self.model_name,
            self.device,
            dim,
            time.perf_counter() - t0,
        )

    def _encode_one(self, text: str) -> np.ndarray:
        """
        Encode a single text string into a sentence embedding.
        """
        if self.model is None:
            self._load()

        with self._lock, torch.no_grad():
            inputs = self.tokenizer(
                text,
                return_tensors="pt",
                truncation=True,
                padding=True,
            ).to(self.device)

            outputs = self.model(**inputs)

            # Mean pooling (mask-aware)
            token_embeddings = outputs.last_hidden_state
            attention_mask = inputs["attention_mask"]

            mask = attention_mask.unsqueeze(-1).expand(token_embeddings.size())
            summed = (token_embeddings * mask).sum(dim=1)
            counts = mask.sum(dim=1).clamp(min=1e-9)

            embedding = summed / counts

        vec = embedding.squeeze(0).cpu().numpy()

        if self.normalize:
            norm = np.linalg.norm(vec)
            if norm > 0:
                vec = vec / norm

        return vec
