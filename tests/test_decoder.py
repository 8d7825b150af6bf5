# tests/test_decoder.py
from __future__ import annotations

import logging

import pytest

from charlabel.decoder import decode, iter_decode
from charlabel.errors import CharsetDecodeError, UnsupportedCharsetError
from charlabel.registry import charsets

_ASCII = bytes(range(0x80))


def test_windows_1252_curly_quotes():
    assert decode("windows-1252", b"\x93A\x94") == "“A”"


def test_us_ascii_label_decodes_as_windows_1252():
    # 0x80 is not ASCII, but the label is treated as windows-1252.
    assert decode("US-ASCII", b"\x80") == "€"


def test_iso_8859_1_is_not_widened():
    assert decode("iso-8859-1", b"\x80") == "\x80"


@pytest.mark.parametrize(
    ("label", "data", "expected"),
    [
        # Bytes the Windows code pages leave undefined are C1 controls.
        ("windows-1252", b"\x81\x8d\x8f\x90\x9d", "\x81\x8d\x8f\x90\x9d"),
        ("us-ascii", b"caf\x8d", "caf\x8d"),
        ("latin1", b"\x90", "\x90"),
        ("8859-1", b"\x9d", "\x9d"),
        ("windows-1250", b"\x81\x83\x88\x90\x98", "\x81\x83\x88\x90\x98"),
        ("windows-1251", b"\x98", "\x98"),
        ("windows-1253", b"\x81\x88", "\x81\x88"),
        ("windows-1254", b"\x8e", "\x8e"),
        ("windows-1257", b"\x8a", "\x8a"),
        ("windows-1258", b"\x8a", "\x8a"),
        ("windows-874", b"\x81", "\x81"),
        ("tis-620", b"\x90", "\x90"),
        ("windows-1255", b"\xca", "\u05ba"),
        ("koi8-u", b"\xae\xbe", "\u045e\u040e"),
        ("x-mac-cyrillic", b"\xff", "\u20ac"),
        ("gbk", b"\x80", "\u20ac"),
        ("gb18030", b"a\x80b", "a\u20acb"),
        ("iso-2022-jp", b"\x1b(I1\x1b(B", "\uff71"),
    ],
)
def test_decodes_like_a_browser(label: str, data: bytes, expected: str):
    assert decode(label, data) == expected


@pytest.mark.parametrize(
    ("label", "data"),
    [
        ("windows-1253", b"\xaa"),
        ("windows-1255", b"\xd9"),
        ("windows-874", b"\xdb"),
        ("windows-1257", b"\xa1"),
        ("gbk", b"\xff"),
    ],
)
def test_bytes_undefined_on_the_web_still_fail(label: str, data: bytes):
    with pytest.raises(CharsetDecodeError):
        decode(label, data)


def test_gbk_trail_byte_0x80_is_not_a_euro_sign():
    assert decode("gbk", b"\x81\x80") == b"\x81\x80".decode("gb18030")
    assert "\u20ac" not in decode("gbk", b"\x81\x80")


def test_gbk_euro_sign_across_chunks():
    chunks = [b"\x81", b"\x80\x80", b"x"]
    expected = b"\x81\x80".decode("gb18030") + "\u20acx"
    assert "".join(iter_decode("gbk", chunks)) == expected


def test_gb18030_four_byte_sequence_split_bytewise():
    data = "\u20ac\U0001f600".encode("gb18030") + b"\x80"
    chunks = [data[i : i + 1] for i in range(len(data))]
    assert "".join(iter_decode("gb18030", chunks)) == "\u20ac\U0001f600\u20ac"


@pytest.mark.parametrize(
    "text",
    ["", "plain ascii", "Héllo wörld café", "日本語のテキスト", "emoji \U0001f600"],
)
def test_utf8_is_lossless(text: str):
    assert decode("utf-8", text.encode()) == text


def test_utf8mb4_decodes_astral_characters():
    assert decode("utf8mb4", "\U0001f600".encode()) == "\U0001f600"


@pytest.mark.parametrize(
    ("label", "codec", "text"),
    [
        ("shift_jis", "shift_jis", "日本語"),
        ("windows-31j", "cp932", "①日本"),
        ("euc-jp", "euc_jp", "日本語"),
        ("iso-2022-jp", "iso2022_jp", "日本語"),
        ("euc-kr", "euc_kr", "한국어"),
        ("gb2312", "gb2312", "中文"),
        ("gbk", "gbk", "中文"),
        ("gb18030", "gb18030", "中文\U0001f600"),
        ("hz-gb-2312", "hz", "中文"),
        ("big5", "big5", "中文"),
        ("koi8-r", "koi8_r", "Привет"),
        ("koi8-u", "koi8_u", "Привіт"),
        ("windows-1251", "cp1251", "Привет"),
        ("ibm866", "cp866", "Привет"),
        ("x-mac-cyrillic", "mac_cyrillic", "Привет"),
        ("iso-8859-5", "iso8859_5", "Привет"),
        ("iso-8859-7", "iso8859_7", "Ελληνικά"),
        ("iso-8859-8-i", "iso8859_8", "עברית"),
        ("windows-1256", "cp1256", "عربي"),
        ("windows-874", "cp874", "ภาษาไทย"),
        ("latin2", "iso8859_2", "Zażółć"),
        ("iso-8859-16", "iso8859_16", "Științe"),
        ("macintosh", "mac_roman", "café"),
        ("cp850", "cp850", "café"),
        ("utf-7", "utf_7", "Hi Mom -☺-!"),
        ("utf-16le", "utf_16_le", "héllo"),
        ("utf-16be", "utf_16_be", "héllo"),
    ],
)
def test_decode_known_text(label: str, codec: str, text: str):
    assert decode(label, text.encode(codec)) == text


def test_unlabelled_utf16_is_little_endian_and_keeps_bom():
    assert decode("utf-16", b"\xff\xfeh\x00i\x00") == "\ufeffhi"


@pytest.mark.parametrize(
    "charset",
    [c for c in charsets() if c.is_ascii_compatible],
    ids=lambda c: c.name,
)
def test_ascii_bytes_decode_to_themselves(charset):
    assert decode(charset.name, _ASCII) == _ASCII.decode("ascii")


def test_gbk_ascii_input_is_identity():
    assert decode("gbk", b"Hello, world!") == "Hello, world!"


def test_accepts_bytearray_and_memoryview():
    data = "Привет".encode("koi8_r")
    assert decode("koi8-r", bytearray(data)) == "Привет"
    assert decode("koi8-r", memoryview(data)) == "Привет"


def test_unsupported_charset():
    with pytest.raises(UnsupportedCharsetError) as exc_info:
        decode("nonexistent-charset-xyz", b"\xff\xfe")
    assert exc_info.value.label == "nonexistent-charset-xyz"
    assert not isinstance(exc_info.value, CharsetDecodeError)


def test_malformed_utf8_raises_decode_error():
    with pytest.raises(CharsetDecodeError) as exc_info:
        decode("utf-8", b"abc\xff")
    assert exc_info.value.charset == "utf-8"
    assert isinstance(exc_info.value, ValueError)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_decode_error_reports_canonical_name():
    with pytest.raises(CharsetDecodeError) as exc_info:
        decode("SJIS", b"\x82")
    assert exc_info.value.charset == "shift_jis"


def test_truncated_utf16_raises_decode_error():
    with pytest.raises(CharsetDecodeError):
        decode("utf-16le", b"a\x00b")


def test_errors_replace():
    assert decode("utf-8", b"a\xffb", errors="replace") == "a\ufffdb"


def test_decode_failure_is_logged(caplog: pytest.LogCaptureFixture):
    with (
        caplog.at_level(logging.DEBUG, logger="charlabel.decoder"),
        pytest.raises(CharsetDecodeError),
    ):
        decode("euc-jp", b"\xa4")
    assert "euc-jp" in caplog.text


@pytest.mark.parametrize(
    "label", ["iso-2022-kr", "csiso2022kr", "iso-2022-cn", "iso-2022-cn-ext"]
)
def test_replacement_labels_decode_to_single_replacement_character(label: str):
    assert decode(label, b"\x1b$)C\x0e!!\x0fabc") == "\ufffd"


def test_replacement_empty_input():
    assert decode("iso-2022-kr", b"") == "\ufffd"


def test_replacement_iter_decode_empty_stream():
    assert list(iter_decode("iso-2022-cn", [])) == ["\ufffd"]
    assert list(iter_decode("iso-2022-cn", [b"", b"ab", b"cd"])) == ["\ufffd"]


def test_x_user_defined():
    assert decode("x-user-defined", b"a\x80\xff") == "a\uf780\uf7ff"


def test_iter_decode_joins_split_multibyte_sequences():
    data = "日本語".encode("cp932")
    chunks = [data[:1], data[1:3], data[3:]]
    assert "".join(iter_decode("shift_jis", chunks)) == "日本語"


def test_iter_decode_skips_empty_pieces():
    data = "é".encode()
    assert list(iter_decode("utf8", [data[:1], data[1:]])) == ["é"]


def test_iter_decode_resolves_label_eagerly():
    with pytest.raises(UnsupportedCharsetError):
        iter_decode("nonexistent-charset-xyz", [])


def test_iter_decode_error_raised_during_iteration():
    pieces = iter_decode("utf-8", [b"ok", b"\xff"])
    assert next(pieces) == "ok"
    with pytest.raises(CharsetDecodeError):
        next(pieces)


def test_iter_decode_truncated_input():
    with pytest.raises(CharsetDecodeError):
        list(iter_decode("utf-8", [b"\xe2\x82"]))


def test_iter_decode_stateful_encoding():
    data = "日本語 text".encode("iso2022_jp")
    chunks = [data[i : i + 1] for i in range(len(data))]
    assert "".join(iter_decode("iso-2022-jp", chunks)) == "日本語 text"
