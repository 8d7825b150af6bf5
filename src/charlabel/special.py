"""Decoders the standard codec registry lacks or defines too strictly.

``replacement``
    Used for ISO-2022-KR and ISO-2022-CN, which are not decoded at all.  Any
    input, empty or not, decodes to a single U+FFFD, so content in those
    encodings is reported as unreadable instead of being silently passed
    through as ASCII.

``x-user-defined``
    Bytes 0x00-0x7F are ASCII; bytes 0x80-0xFF map to the Private Use Area
    code points U+F780-U+F7FF.

``web-windows-*``, ``web-koi8-u``
    The stdlib code page tables leave some bytes undefined.  Browsers and
    mail clients decode every undefined byte in 0x80-0x9F as the C1 control
    of the same value, so these tables are the stdlib ones with those gaps
    filled, plus the few code points the web index adds (windows-1255 0xCA
    and the two Belarusian/Ukrainian letters of KOI8-U).  Bytes the web
    index also leaves undefined still fail to decode.

``web-gb18030``
    GBK and GB18030 as browsers decode them: the stdlib ``gb18030`` codec,
    except that a lone 0x80 byte is the euro sign.

All are exposed as :class:`codecs.CodecInfo` objects and are *not* added to
the global codec search path; :data:`SPECIAL_CODECS` is consulted directly by
:meth:`charlabel.registry.Charset.codec_info`.
"""

from __future__ import annotations

import codecs
import importlib

REPLACEMENT_CHARACTER = "\ufffd"

# Marks an undefined byte in a stdlib decoding table.
_UNDEFINED = "\ufffe"


class ReplacementIncrementalDecoder(codecs.IncrementalDecoder):
    """Emit one U+FFFD for the first non-empty chunk, or at the end of input.

    Whatever comes first wins; nothing is emitted afterwards.
    """

    def __init__(self, errors: str = "strict") -> None:
        super().__init__(errors)
        self._emitted = False

    def decode(self, input: bytes, final: bool = False) -> str:  # noqa: A002
        if self._emitted or not (input or final):
            return ""
        self._emitted = True
        return REPLACEMENT_CHARACTER

    def reset(self) -> None:
        self._emitted = False

    def getstate(self) -> tuple[bytes, int]:
        return (b"", int(self._emitted))

    def setstate(self, state: tuple[bytes, int]) -> None:
        self._emitted = bool(state[1])


def _replacement_decode(input: bytes, errors: str = "strict") -> tuple[str, int]:  # noqa: A002
    return (REPLACEMENT_CHARACTER, len(input))


def _replacement_encode(input: str, errors: str = "strict") -> tuple[bytes, int]:  # noqa: A002
    # The replacement charset has no encoder; only UTF-8 output is meaningful.
    return (input.encode("utf-8", errors), len(input))


def _charmap_codec(name: str, decoding_table: str) -> codecs.CodecInfo:
    """Build a single-byte codec from a 256-character decoding table."""
    encoding_table = codecs.charmap_build(decoding_table)

    def decode(input: bytes, errors: str = "strict") -> tuple[str, int]:  # noqa: A002
        return codecs.charmap_decode(input, errors, decoding_table)

    def encode(input: str, errors: str = "strict") -> tuple[bytes, int]:  # noqa: A002
        return codecs.charmap_encode(input, errors, encoding_table)

    class IncrementalDecoder(codecs.IncrementalDecoder):
        def decode(self, input: bytes, final: bool = False) -> str:  # noqa: A002
            return codecs.charmap_decode(input, self.errors, decoding_table)[0]

    class IncrementalEncoder(codecs.IncrementalEncoder):
        def encode(self, input: str, final: bool = False) -> bytes:  # noqa: A002
            return codecs.charmap_encode(input, self.errors, encoding_table)[0]

    return codecs.CodecInfo(
        name=name,
        encode=encode,
        decode=decode,
        incrementalencoder=IncrementalEncoder,
        incrementaldecoder=IncrementalDecoder,
    )


def _web_table(module: str, overrides: dict[int, str] | None = None) -> str:
    """Return the stdlib table for *module* with its C1 gaps filled."""
    table = list(importlib.import_module(f"encodings.{module}").decoding_table)
    for byte in range(0x80, 0xA0):
        if table[byte] == _UNDEFINED:
            table[byte] = chr(byte)
    for byte, char in (overrides or {}).items():
        table[byte] = char
    return "".join(table)


X_USER_DEFINED = _charmap_codec(
    "x-user-defined",
    "".join(chr(b) if b < 0x80 else chr(0xF780 + b - 0x80) for b in range(256)),
)

_WEB_CODE_PAGES = {
    "web-windows-874": _web_table("cp874"),
    "web-windows-1250": _web_table("cp1250"),
    "web-windows-1251": _web_table("cp1251"),
    "web-windows-1252": _web_table("cp1252"),
    "web-windows-1253": _web_table("cp1253"),
    "web-windows-1254": _web_table("cp1254"),
    "web-windows-1255": _web_table("cp1255", {0xCA: "\u05ba"}),
    "web-windows-1256": _web_table("cp1256"),
    "web-windows-1257": _web_table("cp1257"),
    "web-windows-1258": _web_table("cp1258"),
    "web-koi8-u": _web_table("koi8_u", {0xAE: "\u045e", 0xBE: "\u040e"}),
}

# GB18030 two-byte form of U+20AC.
_GB18030_EURO = b"\xa2\xe3"


class GB18030WebIncrementalDecoder(codecs.IncrementalDecoder):
    """GB18030 decoder that also accepts 0x80 as the euro sign.

    Input is split on character boundaries so that a 0x80 trail byte inside
    a two-byte character is left alone.  Incomplete characters at the end of
    a chunk wait for the next one.
    """

    def __init__(self, errors: str = "strict") -> None:
        super().__init__(errors)
        self._inner = codecs.getincrementaldecoder("gb18030")(errors)
        self._pending = b""

    def decode(self, input: bytes, final: bool = False) -> str:  # noqa: A002
        data = self._pending + bytes(input)
        out = bytearray()
        pos = 0
        while pos < len(data):
            lead = data[pos]
            if lead == 0x80:
                out += _GB18030_EURO
                pos += 1
                continue
            if lead < 0x80 or lead == 0xFF:
                out.append(lead)
                pos += 1
                continue
            if pos + 1 >= len(data):
                break
            size = 4 if 0x30 <= data[pos + 1] <= 0x39 else 2
            if pos + size > len(data):
                break
            out += data[pos : pos + size]
            pos += size
        self._pending = data[pos:]
        if final:
            out += self._pending
            self._pending = b""
        return self._inner.decode(bytes(out), final)

    def reset(self) -> None:
        self._inner.reset()
        self._pending = b""


def _gb18030_web_decode(input: bytes, errors: str = "strict") -> tuple[str, int]:  # noqa: A002
    text = GB18030WebIncrementalDecoder(errors).decode(input, final=True)
    return (text, len(input))


REPLACEMENT = codecs.CodecInfo(
    name="replacement",
    encode=_replacement_encode,
    decode=_replacement_decode,
    incrementaldecoder=ReplacementIncrementalDecoder,
)

GB18030_WEB = codecs.CodecInfo(
    name="web-gb18030",
    encode=codecs.lookup("gb18030").encode,
    decode=_gb18030_web_decode,
    incrementalencoder=codecs.getincrementalencoder("gb18030"),
    incrementaldecoder=GB18030WebIncrementalDecoder,
)

#: Codecs resolved by name before falling back to :func:`codecs.lookup`.
SPECIAL_CODECS: dict[str, codecs.CodecInfo] = {
    REPLACEMENT.name: REPLACEMENT,
    X_USER_DEFINED.name: X_USER_DEFINED,
    GB18030_WEB.name: GB18030_WEB,
    **{name: _charmap_codec(name, table) for name, table in _WEB_CODE_PAGES.items()},
}
