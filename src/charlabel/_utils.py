"""Internal shared utilities for charlabel."""

from __future__ import annotations

#: Name of the encoding every decoder produces.
CANONICAL_CHARSET: str = "utf-8"

#: Default number of bytes pulled from a source per refill of a stream decoder.
DEFAULT_CHUNK_SIZE: int = 65_536


def _validate_chunk_size(chunk_size: int) -> None:
    """Raise ValueError if *chunk_size* is not a positive integer."""
    if (
        isinstance(chunk_size, bool)
        or not isinstance(chunk_size, int)
        or chunk_size < 1
    ):
        msg = "chunk_size must be a positive integer"
        raise ValueError(msg)
