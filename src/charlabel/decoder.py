"""Decoding of labelled byte strings and byte streams.

:func:`decode` converts a complete byte string to :class:`str`.
:func:`open_decoder` wraps a binary file-like object so that reading it
yields UTF-8; the wrapper decodes lazily as the caller reads and never reads
ahead of what it has been asked for by more than one chunk.
:func:`iter_decode` does the same for an iterable of byte chunks.
"""

from __future__ import annotations

import codecs
import io
import logging
from collections.abc import Iterable, Iterator
from typing import Protocol

from charlabel._utils import (
    CANONICAL_CHARSET,
    DEFAULT_CHUNK_SIZE,
    _validate_chunk_size,
)
from charlabel.errors import CharsetDecodeError
from charlabel.registry import Charset, lookup

logger = logging.getLogger(__name__)


class ByteSource(Protocol):
    """Anything with a binary ``read(size)`` method."""

    def read(self, size: int = -1, /) -> bytes | None: ...


def _decode_failure(charset: Charset, exc: Exception) -> CharsetDecodeError:
    logger.debug("decoding %s failed: %s", charset.name, exc)
    return CharsetDecodeError(charset.name, str(exc))


def decode(
    label: str,
    data: bytes | bytearray | memoryview,
    errors: str = "strict",
) -> str:
    """Decode *data* from the charset named by *label*.

    The whole input is decoded in one pass; on failure no partial text is
    returned.  Only a :class:`UnicodeDecodeError` from the codec is
    translated; text produced by the *errors* handler (lone surrogates from
    ``"surrogateescape"``, for example) is returned as is.

    :param label: Charset label, matched case-insensitively.
    :param data: The encoded bytes.
    :param errors: Codec error handler (``"strict"``, ``"replace"``, ...).
    :raises UnsupportedCharsetError: If *label* is not a known charset.
    :raises CharsetDecodeError: If *data* is malformed for the charset.
    """
    charset = lookup(label)
    decoder = charset.incremental_decoder(errors)
    try:
        return decoder.decode(bytes(data), final=True)
    except UnicodeDecodeError as exc:
        raise _decode_failure(charset, exc) from exc


def iter_decode(
    label: str,
    chunks: Iterable[bytes],
    errors: str = "strict",
) -> Iterator[str]:
    """Incrementally decode an iterable of byte chunks.

    The label is resolved immediately, so an unknown charset raises
    :class:`UnsupportedCharsetError` before iteration starts.  Decode errors
    are raised from the iteration step that hits them.
    """
    charset = lookup(label)
    return _iter_decode(charset, charset.incremental_decoder(errors), chunks)


def _iter_decode(
    charset: Charset,
    decoder: codecs.IncrementalDecoder,
    chunks: Iterable[bytes],
) -> Iterator[str]:
    try:
        for chunk in chunks:
            text = decoder.decode(chunk)
            if text:
                yield text
        text = decoder.decode(b"", final=True)
    except UnicodeDecodeError as exc:
        raise _decode_failure(charset, exc) from exc
    if text:
        yield text


class DecodingReader(io.RawIOBase):
    """Read-only binary stream that transcodes *source* to UTF-8.

    Each refill pulls at most *chunk_size* bytes from *source*.  Decoded
    output that does not fit the caller's buffer is kept for the next read.
    Malformed input and ``OSError`` from the source are raised as
    :class:`CharsetDecodeError` by the read that encounters them.

    The bytes produced are ``decode(label, data, errors).encode("utf-8",
    errors)``: the same *errors* handler is used to decode and to re-encode,
    so ``"surrogateescape"`` passes undecodable bytes through unchanged.
    Decoded text that cannot be written as UTF-8 under *errors* (a lone
    surrogate from UTF-7 with ``"strict"``, say) is a
    :class:`CharsetDecodeError` too.

    Closing the reader does not close *source*.
    """

    def __init__(
        self,
        source: ByteSource,
        charset: Charset,
        errors: str = "strict",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        _validate_chunk_size(chunk_size)
        super().__init__()
        self._source = source
        self._charset = charset
        self._decoder = charset.incremental_decoder(errors)
        self._errors = errors
        self._chunk_size = chunk_size
        self._pending = bytearray()
        self._eof = False

    @property
    def charset(self) -> Charset:
        """The charset being decoded from."""
        return self._charset

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int | None:  # noqa: ANN001
        if self.closed:
            msg = "I/O operation on closed file"
            raise ValueError(msg)
        while not self._pending and not self._eof:
            if not self._fill():
                # Non-blocking source with nothing available yet.
                return None
        view = memoryview(buffer).cast("B")
        n = min(len(view), len(self._pending))
        view[:n] = self._pending[:n]
        del self._pending[:n]
        return n

    def _fill(self) -> bool:
        """Decode one more chunk into the pending buffer.

        Returns False if the source had no data ready.
        """
        try:
            chunk = self._source.read(self._chunk_size)
        except OSError as exc:
            raise _decode_failure(self._charset, exc) from exc
        if chunk is None:
            return False
        final = not chunk
        try:
            text = self._decoder.decode(chunk, final=final)
            self._pending += text.encode(CANONICAL_CHARSET, self._errors)
        except UnicodeError as exc:
            raise _decode_failure(self._charset, exc) from exc
        if final:
            self._eof = True
        return True


def open_decoder(
    label: str,
    source: ByteSource,
    errors: str = "strict",
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ByteSource:
    """Return a binary stream that yields *source* transcoded to UTF-8.

    When *label* is exactly ``utf-8`` (in any letter case) *source* itself
    is returned.  Any other label is resolved through the alias table and
    *source* is wrapped in a :class:`DecodingReader`.

    :raises UnsupportedCharsetError: If *label* is not a known charset.
    :raises ValueError: If *chunk_size* is not a positive integer.
    """
    _validate_chunk_size(chunk_size)
    if label.lower() == CANONICAL_CHARSET:
        return source
    return DecodingReader(source, lookup(label), errors=errors, chunk_size=chunk_size)
