"""HTML ``<meta>`` charset declaration extraction."""

from __future__ import annotations

import re

# Matches both <meta charset="..."> and the charset parameter inside
# <meta http-equiv="Content-Type" content="text/html; charset=...">.
# Not an HTML parser: declarations inside comments or scripts match too.
_META_CHARSET_RE = re.compile(
    r"""<meta.*charset="?\s*(?P<charset>[a-zA-Z0-9_.:-]+)\s*"?""", re.IGNORECASE
)


def find_charset_in_html(html: str) -> str:
    """Return the charset declared by the first matching ``<meta>`` tag.

    The value is returned exactly as written, without lowercasing or
    checking it against the alias table.

    :param html: The document text.
    :returns: The declared charset label, or ``""`` if there is none.
    """
    match = _META_CHARSET_RE.search(html)
    if match is None:
        return ""
    return match.group("charset")
