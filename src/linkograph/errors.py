from __future__ import annotations


class LinkographError(Exception):
    """
    Base class for all linkograph errors.
    """


class LengthMismatch(LinkographError, ValueError):
    """
    Raised when raw vector math receives sequences of different lengths.

    Always a programming error, never user-facing.
    """

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"vector length mismatch: {left} != {right}")
        self.left = left
        self.right = right


class DimensionMismatch(LinkographError, ValueError):
    """
    Raised when an embedding does not match the dimension fixed
    for the current backend. Fatal for the recompute pass.
    """

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"embedding dimension mismatch: expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class BackendUnavailable(LinkographError, RuntimeError):
    """
    The embedding backend failed or did not become ready in time.

    Recovered locally by falling back to lexical scoring.
    """
