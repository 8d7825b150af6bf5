"""Charset label normalization and decoding for mail and web content."""

from __future__ import annotations

from charlabel.decoder import DecodingReader, decode, iter_decode, open_decoder
from charlabel.enums import CharsetKind
from charlabel.errors import (
    CharsetDecodeError,
    CharsetError,
    UnsupportedCharsetError,
)
from charlabel.markup import find_charset_in_html
from charlabel.registry import (
    ALIASES,
    Charset,
    canonical_name,
    charsets,
    is_supported,
    lookup,
)

__version__ = "1.0.0"
__all__ = [
    "ALIASES",
    "Charset",
    "CharsetDecodeError",
    "CharsetError",
    "CharsetKind",
    "DecodingReader",
    "UnsupportedCharsetError",
    "canonical_name",
    "charsets",
    "decode",
    "find_charset_in_html",
    "is_supported",
    "iter_decode",
    "lookup",
    "open_decoder",
]
