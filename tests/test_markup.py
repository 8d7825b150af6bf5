# tests/test_markup.py
from __future__ import annotations

import pytest

from charlabel.markup import find_charset_in_html


def test_html5_meta_charset_keeps_case():
    html = '<html><head><meta charset="ISO-8859-1"></head>'
    assert find_charset_in_html(html) == "ISO-8859-1"


def test_no_meta_tag():
    assert find_charset_in_html("<html><head></head>") == ""


def test_empty_input():
    assert find_charset_in_html("") == ""


def test_meta_without_charset():
    html = '<html><head><meta name="description" content="x"></head>'
    assert find_charset_in_html(html) == ""


def test_html4_content_type():
    html = (
        "<html><head>"
        '<meta http-equiv="Content-Type" content="text/html; charset=windows-1252">'
        "</head></html>"
    )
    assert find_charset_in_html(html) == "windows-1252"


@pytest.mark.parametrize(
    "html",
    [
        '<META CHARSET="utf-8">',
        '<Meta Charset="utf-8">',
        "<meta charset=utf-8>",
        '<meta charset=" utf-8 ">',
        '<meta charset="utf-8" />',
        '<meta charset="utf-8;">',
    ],
)
def test_meta_charset_variants(html: str):
    assert find_charset_in_html(html) == "utf-8"


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        ('<meta charset="iso_8859-1:1987">', "iso_8859-1:1987"),
        ('<meta charset="ks_c_5601-1987">', "ks_c_5601-1987"),
        ('<meta charset="unicode-1-1-utf-8">', "unicode-1-1-utf-8"),
    ],
)
def test_charset_value_characters(html: str, expected: str):
    assert find_charset_in_html(html) == expected


def test_value_is_not_validated():
    assert find_charset_in_html('<meta charset="not-a-real-charset">') == (
        "not-a-real-charset"
    )


def test_first_declaration_wins():
    html = '<meta charset="big5">\n<meta charset="gbk">'
    assert find_charset_in_html(html) == "big5"


def test_later_declaration_on_same_line_wins():
    # The tag prefix is matched greedily up to the last charset on the line.
    html = '<meta charset="big5"><meta charset="gbk">'
    assert find_charset_in_html(html) == "gbk"


def test_declaration_inside_comment_matches():
    html = '<html><!-- <meta charset="koi8-r"> --><body></body></html>'
    assert find_charset_in_html(html) == "koi8-r"


def test_charset_outside_meta_is_ignored():
    html = '<script charset="utf-8"></script>'
    assert find_charset_in_html(html) == ""
