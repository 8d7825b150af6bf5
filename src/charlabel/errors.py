"""Exceptions raised by charlabel."""

from __future__ import annotations


class CharsetError(Exception):
    """Base class for all charlabel errors."""


class UnsupportedCharsetError(CharsetError, LookupError):
    """The charset label has no entry in the alias table.

    :attr:`label` holds the label exactly as the caller supplied it, before
    lowercasing, so it can be reported back verbatim.
    """

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"unsupported charset {label!r}")


class CharsetDecodeError(CharsetError, ValueError):
    """Decoding failed part way through the input.

    Raised for malformed byte sequences and for I/O errors from the
    underlying byte source.  The original exception is chained as
    ``__cause__``.
    """

    def __init__(self, charset: str, reason: str) -> None:
        self.charset = charset
        self.reason = reason
        super().__init__(f"cannot decode {charset}: {reason}")
