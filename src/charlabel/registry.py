"""Charset alias table.

Maps the charset labels found in the wild (MIME headers, HTTP
``Content-Type`` parameters, HTML ``<meta>`` tags) to a canonical charset
name and the codec that decodes it.  The label set follows the WHATWG
Encoding Standard's label table, extended with aliases seen in real mail:
bare ISO numbers (``8859-1``), Oracle and MySQL charset names, and a few
Microsoft code page spellings.

Several labels deliberately resolve to a superset rather than the charset
they name.  ``us-ascii``, ``latin1`` and friends decode as windows-1252,
ISO-8859-9 decodes as windows-1254 and ISO-8859-11 as windows-874, exactly
as browsers do.  The ISO-2022 Korean and Chinese variants resolve to the
``replacement`` charset: they are recognised, but their content decodes to a
single U+FFFD rather than to text.
"""

from __future__ import annotations

import codecs
import dataclasses
import logging
from collections.abc import Mapping
from types import MappingProxyType

from charlabel._utils import CANONICAL_CHARSET
from charlabel.enums import CharsetKind
from charlabel.errors import UnsupportedCharsetError
from charlabel.special import SPECIAL_CODECS

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class Charset:
    """A canonical charset and the codec used to decode it.

    :attr:`name` is the canonical WHATWG/IANA spelling reported to callers.
    :attr:`codec` names the decoder: a Python codec name, or one of the
    names in :data:`charlabel.special.SPECIAL_CODECS`.  Where WHATWG defines
    a charset as a superset of its strict standard the superset codec is
    used (``shift_jis`` decodes as cp932, ``euc-kr`` as cp949, ``big5`` as
    Big5-HKSCS, ``gbk`` as GB18030 and ``iso-2022-jp`` as ISO-2022-JP-EXT).
    The Windows code pages and KOI8-U use the web tables from
    :mod:`charlabel.special`.
    """

    name: str
    codec: str
    kind: CharsetKind

    @property
    def is_ascii_compatible(self) -> bool:
        """Whether bytes 0x00-0x7F always decode to the same ASCII characters."""
        if self.name == CANONICAL_CHARSET:
            return True
        return bool(self.kind & (CharsetKind.SINGLE_BYTE | CharsetKind.MULTI_BYTE))

    def codec_info(self) -> codecs.CodecInfo:
        """Resolve :attr:`codec` to a :class:`codecs.CodecInfo`."""
        special = SPECIAL_CODECS.get(self.codec)
        if special is not None:
            return special
        return codecs.lookup(self.codec)

    def incremental_decoder(self, errors: str = "strict") -> codecs.IncrementalDecoder:
        """Return a new incremental decoder; instances are never shared."""
        return self.codec_info().incrementaldecoder(errors)


_SB = CharsetKind.SINGLE_BYTE
_MB = CharsetKind.MULTI_BYTE

UTF_8 = Charset("utf-8", "utf-8", CharsetKind.UNICODE)
UTF_7 = Charset("utf-7", "utf-7", CharsetKind.UNICODE | CharsetKind.STATEFUL)
# Unlabelled "utf-16" is little-endian.  A leading BOM is not stripped.
UTF_16BE = Charset("utf-16be", "utf-16-be", CharsetKind.UNICODE)
UTF_16LE = Charset("utf-16le", "utf-16-le", CharsetKind.UNICODE)

IBM866 = Charset("ibm866", "cp866", _SB)
CP850 = Charset("cp850", "cp850", _SB)
ISO_8859_1 = Charset("iso-8859-1", "iso8859-1", _SB)
ISO_8859_2 = Charset("iso-8859-2", "iso8859-2", _SB)
ISO_8859_3 = Charset("iso-8859-3", "iso8859-3", _SB)
ISO_8859_4 = Charset("iso-8859-4", "iso8859-4", _SB)
ISO_8859_5 = Charset("iso-8859-5", "iso8859-5", _SB)
ISO_8859_6 = Charset("iso-8859-6", "iso8859-6", _SB)
ISO_8859_7 = Charset("iso-8859-7", "iso8859-7", _SB)
ISO_8859_8 = Charset("iso-8859-8", "iso8859-8", _SB)
ISO_8859_8_I = Charset("iso-8859-8-i", "iso8859-8", _SB)
ISO_8859_10 = Charset("iso-8859-10", "iso8859-10", _SB)
ISO_8859_13 = Charset("iso-8859-13", "iso8859-13", _SB)
ISO_8859_14 = Charset("iso-8859-14", "iso8859-14", _SB)
ISO_8859_15 = Charset("iso-8859-15", "iso8859-15", _SB)
ISO_8859_16 = Charset("iso-8859-16", "iso8859-16", _SB)
KOI8_R = Charset("koi8-r", "koi8-r", _SB)
KOI8_U = Charset("koi8-u", "web-koi8-u", _SB)
MACINTOSH = Charset("macintosh", "mac-roman", _SB)
X_MAC_CYRILLIC = Charset("x-mac-cyrillic", "mac-cyrillic", _SB)
WINDOWS_874 = Charset("windows-874", "web-windows-874", _SB)
WINDOWS_1250 = Charset("windows-1250", "web-windows-1250", _SB)
WINDOWS_1251 = Charset("windows-1251", "web-windows-1251", _SB)
WINDOWS_1252 = Charset("windows-1252", "web-windows-1252", _SB)
WINDOWS_1253 = Charset("windows-1253", "web-windows-1253", _SB)
WINDOWS_1254 = Charset("windows-1254", "web-windows-1254", _SB)
WINDOWS_1255 = Charset("windows-1255", "web-windows-1255", _SB)
WINDOWS_1256 = Charset("windows-1256", "web-windows-1256", _SB)
WINDOWS_1257 = Charset("windows-1257", "web-windows-1257", _SB)
WINDOWS_1258 = Charset("windows-1258", "web-windows-1258", _SB)
X_USER_DEFINED = Charset("x-user-defined", "x-user-defined", _SB)

GBK = Charset("gbk", "web-gb18030", _MB)
GB18030 = Charset("gb18030", "web-gb18030", _MB)
HZ_GB_2312 = Charset("hz-gb-2312", "hz", CharsetKind.STATEFUL)
BIG5 = Charset("big5", "big5hkscs", _MB)
EUC_JP = Charset("euc-jp", "euc-jp", _MB)
ISO_2022_JP = Charset("iso-2022-jp", "iso2022-jp-ext", CharsetKind.STATEFUL)
SHIFT_JIS = Charset("shift_jis", "cp932", _MB)
EUC_KR = Charset("euc-kr", "cp949", _MB)

REPLACEMENT = Charset("replacement", "replacement", CharsetKind.REPLACEMENT)

#: Lowercase label -> :class:`Charset`.  Read-only; built once at import.
ALIASES: Mapping[str, Charset] = MappingProxyType({
    "unicode-1-1-utf-8": UTF_8,
    "utf-8": UTF_8,
    "utf8": UTF_8,
    "utf-7": UTF_7,
    "utf7": UTF_7,
    "866": IBM866,
    "cp866": IBM866,
    "csibm866": IBM866,
    "ibm866": IBM866,
    "csisolatin2": ISO_8859_2,
    "iso-8859-2": ISO_8859_2,
    "iso-ir-101": ISO_8859_2,
    "iso8859-2": ISO_8859_2,
    "iso88592": ISO_8859_2,
    "iso_8859-2": ISO_8859_2,
    "iso_8859-2:1987": ISO_8859_2,
    "l2": ISO_8859_2,
    "latin2": ISO_8859_2,
    "csisolatin3": ISO_8859_3,
    "iso-8859-3": ISO_8859_3,
    "iso-ir-109": ISO_8859_3,
    "iso8859-3": ISO_8859_3,
    "iso88593": ISO_8859_3,
    "iso_8859-3": ISO_8859_3,
    "iso_8859-3:1988": ISO_8859_3,
    "l3": ISO_8859_3,
    "latin3": ISO_8859_3,
    "csisolatin4": ISO_8859_4,
    "iso-8859-4": ISO_8859_4,
    "iso-ir-110": ISO_8859_4,
    "iso8859-4": ISO_8859_4,
    "iso88594": ISO_8859_4,
    "iso_8859-4": ISO_8859_4,
    "iso_8859-4:1988": ISO_8859_4,
    "l4": ISO_8859_4,
    "latin4": ISO_8859_4,
    "csisolatincyrillic": ISO_8859_5,
    "cyrillic": ISO_8859_5,
    "iso-8859-5": ISO_8859_5,
    "iso-ir-144": ISO_8859_5,
    "iso8859-5": ISO_8859_5,
    "iso88595": ISO_8859_5,
    "iso_8859-5": ISO_8859_5,
    "iso_8859-5:1988": ISO_8859_5,
    "arabic": ISO_8859_6,
    "asmo-708": ISO_8859_6,
    "csiso88596e": ISO_8859_6,
    "csiso88596i": ISO_8859_6,
    "csisolatinarabic": ISO_8859_6,
    "ecma-114": ISO_8859_6,
    "iso-8859-6": ISO_8859_6,
    "iso-8859-6-e": ISO_8859_6,
    "iso-8859-6-i": ISO_8859_6,
    "iso-ir-127": ISO_8859_6,
    "iso8859-6": ISO_8859_6,
    "iso88596": ISO_8859_6,
    "iso_8859-6": ISO_8859_6,
    "iso_8859-6:1987": ISO_8859_6,
    "csisolatingreek": ISO_8859_7,
    "ecma-118": ISO_8859_7,
    "elot_928": ISO_8859_7,
    "greek": ISO_8859_7,
    "greek8": ISO_8859_7,
    "iso-8859-7": ISO_8859_7,
    "iso-ir-126": ISO_8859_7,
    "iso8859-7": ISO_8859_7,
    "iso88597": ISO_8859_7,
    "iso_8859-7": ISO_8859_7,
    "iso_8859-7:1987": ISO_8859_7,
    "sun_eu_greek": ISO_8859_7,
    "csiso88598e": ISO_8859_8,
    "csisolatinhebrew": ISO_8859_8,
    "hebrew": ISO_8859_8,
    "iso-8859-8": ISO_8859_8,
    "iso-8859-8-e": ISO_8859_8,
    "iso-ir-138": ISO_8859_8,
    "iso8859-8": ISO_8859_8,
    "iso88598": ISO_8859_8,
    "iso_8859-8": ISO_8859_8,
    "iso_8859-8:1988": ISO_8859_8,
    "visual": ISO_8859_8,
    "csiso88598i": ISO_8859_8_I,
    "iso-8859-8-i": ISO_8859_8_I,
    "logical": ISO_8859_8_I,
    "csisolatin6": ISO_8859_10,
    "iso-8859-10": ISO_8859_10,
    "iso-ir-157": ISO_8859_10,
    "iso8859-10": ISO_8859_10,
    "iso885910": ISO_8859_10,
    "l6": ISO_8859_10,
    "latin6": ISO_8859_10,
    "iso-8859-13": ISO_8859_13,
    "iso8859-13": ISO_8859_13,
    "iso885913": ISO_8859_13,
    "iso-8859-14": ISO_8859_14,
    "iso8859-14": ISO_8859_14,
    "iso885914": ISO_8859_14,
    "csisolatin9": ISO_8859_15,
    "iso-8859-15": ISO_8859_15,
    "iso8859-15": ISO_8859_15,
    "iso885915": ISO_8859_15,
    "iso_8859-15": ISO_8859_15,
    "l9": ISO_8859_15,
    "iso-8859-16": ISO_8859_16,
    "cskoi8r": KOI8_R,
    "koi": KOI8_R,
    "koi8": KOI8_R,
    "koi8-r": KOI8_R,
    "koi8_r": KOI8_R,
    "koi8-u": KOI8_U,
    "csmacintosh": MACINTOSH,
    "mac": MACINTOSH,
    "macintosh": MACINTOSH,
    "x-mac-roman": MACINTOSH,
    # ISO-8859-11 and TIS-620 decode as windows-874.
    "dos-874": WINDOWS_874,
    "iso-8859-11": WINDOWS_874,
    "iso8859-11": WINDOWS_874,
    "iso885911": WINDOWS_874,
    "tis-620": WINDOWS_874,
    "windows-874": WINDOWS_874,
    "cp1250": WINDOWS_1250,
    "windows-1250": WINDOWS_1250,
    "x-cp1250": WINDOWS_1250,
    "cp1251": WINDOWS_1251,
    "windows-1251": WINDOWS_1251,
    "x-cp1251": WINDOWS_1251,
    # ASCII and most Latin-1 labels decode as the windows-1252 superset.
    "ansi_x3.4-1968": WINDOWS_1252,
    "ascii": WINDOWS_1252,
    "cp1252": WINDOWS_1252,
    "cp819": WINDOWS_1252,
    "csisolatin1": WINDOWS_1252,
    "ibm819": WINDOWS_1252,
    "iso-8859-1": ISO_8859_1,
    "iso-ir-100": WINDOWS_1252,
    "iso8859-1": ISO_8859_1,
    "iso8859_1": ISO_8859_1,
    "iso88591": ISO_8859_1,
    "iso_8859-1": ISO_8859_1,
    "iso_8859-1:1987": ISO_8859_1,
    "l1": WINDOWS_1252,
    "latin1": WINDOWS_1252,
    "us-ascii": WINDOWS_1252,
    "windows-1252": WINDOWS_1252,
    "x-cp1252": WINDOWS_1252,
    "cp1253": WINDOWS_1253,
    "windows-1253": WINDOWS_1253,
    "x-cp1253": WINDOWS_1253,
    "cp1254": WINDOWS_1254,
    "csisolatin5": WINDOWS_1254,
    "iso-8859-9": WINDOWS_1254,
    "iso-ir-148": WINDOWS_1254,
    "iso8859-9": WINDOWS_1254,
    "iso88599": WINDOWS_1254,
    "iso_8859-9": WINDOWS_1254,
    "iso_8859-9:1989": WINDOWS_1254,
    "l5": WINDOWS_1254,
    "latin5": WINDOWS_1254,
    "windows-1254": WINDOWS_1254,
    "x-cp1254": WINDOWS_1254,
    "cp1255": WINDOWS_1255,
    "windows-1255": WINDOWS_1255,
    "x-cp1255": WINDOWS_1255,
    "cp1256": WINDOWS_1256,
    "windows-1256": WINDOWS_1256,
    "x-cp1256": WINDOWS_1256,
    "cp1257": WINDOWS_1257,
    "windows-1257": WINDOWS_1257,
    "x-cp1257": WINDOWS_1257,
    "cp1258": WINDOWS_1258,
    "windows-1258": WINDOWS_1258,
    "x-cp1258": WINDOWS_1258,
    "x-mac-cyrillic": X_MAC_CYRILLIC,
    "x-mac-ukrainian": X_MAC_CYRILLIC,
    "chinese": GBK,
    "csgb2312": GBK,
    "csiso58gb231280": GBK,
    "gb2312": GBK,
    "gb_2312": GBK,
    "gb_2312-80": GBK,
    "gbk": GBK,
    "iso-ir-58": GBK,
    "x-gbk": GBK,
    "gb18030": GB18030,
    "gb-18030": GB18030,
    "hz-gb-2312": HZ_GB_2312,
    "big5": BIG5,
    "big5-hkscs": BIG5,
    "cn-big5": BIG5,
    "csbig5": BIG5,
    "x-x-big5": BIG5,
    "cseucpkdfmtjapanese": EUC_JP,
    "euc-jp": EUC_JP,
    "x-euc-jp": EUC_JP,
    "csiso2022jp": ISO_2022_JP,
    "iso-2022-jp": ISO_2022_JP,
    "csshiftjis": SHIFT_JIS,
    "ms_kanji": SHIFT_JIS,
    "shift-jis": SHIFT_JIS,
    "shift_jis": SHIFT_JIS,
    "sjis": SHIFT_JIS,
    "windows-31j": SHIFT_JIS,
    "x-sjis": SHIFT_JIS,
    "cseuckr": EUC_KR,
    "csksc56011987": EUC_KR,
    "euc-kr": EUC_KR,
    "iso-ir-149": EUC_KR,
    "korean": EUC_KR,
    "ks_c_5601-1987": EUC_KR,
    "ks_c_5601-1989": EUC_KR,
    "ksc5601": EUC_KR,
    "ksc_5601": EUC_KR,
    "windows-949": EUC_KR,
    # Recognised but not decoded.
    "csiso2022kr": REPLACEMENT,
    "iso-2022-kr": REPLACEMENT,
    "iso-2022-cn": REPLACEMENT,
    "iso-2022-cn-ext": REPLACEMENT,
    "utf-16be": UTF_16BE,
    "utf-16": UTF_16LE,
    "utf-16le": UTF_16LE,
    "x-user-defined": X_USER_DEFINED,
    # Non-WHATWG spellings seen in mail headers.
    "iso646-us": WINDOWS_1252,  # ISO 646 IRV:1991 is identical to US-ASCII
    "iso: western": WINDOWS_1252,  # Oracle-style spelling of ISO-8859-1
    "we8iso8859p1": WINDOWS_1252,  # Oracle NLS name for ISO-8859-1
    "cp936": GBK,  # Microsoft code page for GBK
    "cp850": CP850,
    "cp-850": CP850,
    "ibm850": CP850,
    "136": BIG5,  # Oracle numeric id for Big5
    "cp932": SHIFT_JIS,
    "8859-1": WINDOWS_1252,
    "8859_1": WINDOWS_1252,
    "8859-2": ISO_8859_2,
    "8859_2": ISO_8859_2,
    "8859-3": ISO_8859_3,
    "8859_3": ISO_8859_3,
    "8859-4": ISO_8859_4,
    "8859_4": ISO_8859_4,
    "8859-5": ISO_8859_5,
    "8859_5": ISO_8859_5,
    "8859-6": ISO_8859_6,
    "8859_6": ISO_8859_6,
    "8859-7": ISO_8859_7,
    "8859_7": ISO_8859_7,
    "8859-8": ISO_8859_8,
    "8859_8": ISO_8859_8,
    "8859-10": ISO_8859_10,
    "8859_10": ISO_8859_10,
    "8859-13": ISO_8859_13,
    "8859_13": ISO_8859_13,
    "8859-14": ISO_8859_14,
    "8859_14": ISO_8859_14,
    "8859-15": ISO_8859_15,
    "8859_15": ISO_8859_15,
    "8859-16": ISO_8859_16,
    "8859_16": ISO_8859_16,
    "utf8mb4": UTF_8,  # MySQL name for full 4-byte UTF-8
    "238": WINDOWS_1250,
})


def lookup(label: str) -> Charset:
    """Return the :class:`Charset` registered for *label*.

    The label is lowercased before the lookup; no other normalization is
    applied, so surrounding whitespace must already have been stripped.

    :raises UnsupportedCharsetError: If the label is not in the table.
    """
    try:
        return ALIASES[label.lower()]
    except KeyError:
        logger.debug("no charset registered for label %r", label)
        raise UnsupportedCharsetError(label) from None


def canonical_name(label: str) -> str:
    """Return the canonical charset name for *label*."""
    return lookup(label).name


def is_supported(label: str) -> bool:
    """Return True if *label* is in the alias table."""
    return label.lower() in ALIASES


def charsets(kind: CharsetKind = CharsetKind.ALL) -> tuple[Charset, ...]:
    """Return every distinct charset in the table, filtered by *kind*."""
    return tuple(c for c in dict.fromkeys(ALIASES.values()) if c.kind & kind)
