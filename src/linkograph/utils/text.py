from __future__ import annotations

import re
import hashlib
from typing import List

_LINE_SPLIT = re.compile(r"\r?\n")


def split_lines(raw: str) -> List[str]:
    """
    Splits raw input into trimmed, non-blank lines in document order.
    """
    return [line.strip() for line in _LINE_SPLIT.split(raw) if line.strip()]


def hash_text(text: str, *, namespace: str = "") -> str:
    """
    Stable content hash, optionally scoped by a namespace prefix.
    """
    payload = f"{namespace}:{text}" if namespace else text
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
