"""Fixed-size sliding-window text chunker."""

import math

DEFAULT_CHUNK_SIZE = 1200
DEFAULT_CHUNK_OVERLAP = 150


def validate_chunk_params(chunk_size: int, overlap: int) -> None:
    """Raise ValueError unless 0 <= overlap < chunk_size."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    if overlap < 0:
        raise ValueError("overlap must be >= 0")
    if overlap >= chunk_size:
        raise ValueError(f"overlap ({overlap}) must be smaller than chunk_size ({chunk_size})")


def expected_chunk_count(length: int, chunk_size: int, overlap: int) -> int:
    """Number of windows chunk_text() slides over a text of ``length`` chars.

    Whitespace-only windows are dropped afterwards, so the actual count can
    be lower for sparse text.
    """
    if length <= 0:
        return 0
    if length <= chunk_size:
        return 1
    return math.ceil((length - overlap) / (chunk_size - overlap))


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """Split text into overlapping windows of at most ``chunk_size`` chars.

    Windows start at offset 0 and advance by ``chunk_size - overlap`` until
    one reaches the end of the text. Each window is trimmed; empty or
    whitespace-only windows are dropped.
    """
    validate_chunk_params(chunk_size, overlap)

    step = chunk_size - overlap
    length = len(text)
    chunks = []
    start = 0

    while start < length:
        end = min(length, start + chunk_size)
        window = text[start:end].strip()
        if window:
            chunks.append(window)
        if end >= length:
            break
        start += step

    return chunks
