DEFAULTS = {
    # Minimum score for a pair of moves to count as an active link
    "THRESHOLD": 0.4,
    # Input quiescence before a debounced edit is scored (ms)
    "DEBOUNCE_MS": 500,
    # How long to wait for the embedding backend before falling back (ms)
    "READINESS_TIMEOUT_MS": 8000,
    # Deadline for one analyze request; must exceed the readiness timeout (ms)
    "OUTER_TIMEOUT_MS": 10000,
    # Reuse embeddings of unchanged move texts across edits
    "CACHE_EMBEDDINGS": True,
    # Disable to always score lexically without probing the backend
    "SEMANTIC_ENABLED": True,
    # Sentence embedding model
    "EMBEDDING_MODEL": "sentence-transformers/all-MiniLM-L6-v2",
    # Torch device for the embedding model
    "EMBEDDING_DEVICE": "cpu",
    # L2-normalize embeddings
    "EMBEDDING_NORMALIZE": True,
    # Expected embedding dimension (None = taken from the model)
    "EMBEDDING_DIMENSION": None,
}
