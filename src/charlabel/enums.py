"""Enumerations for charlabel."""

import enum


class CharsetKind(enum.IntFlag):
    """Bit flags describing how a charset maps bytes to characters."""

    UNICODE = 1
    SINGLE_BYTE = 2
    MULTI_BYTE = 4
    # Escape or shift-state encodings: UTF-7, HZ-GB-2312, ISO-2022-JP.
    STATEFUL = 8
    REPLACEMENT = 16
    ALL = UNICODE | SINGLE_BYTE | MULTI_BYTE | STATEFUL | REPLACEMENT
