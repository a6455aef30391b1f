#!/usr/bin/env python3

"""Patch file metadata normalisation"""

import unicodedata

UNKNOWN_TARGET_NAME = "UNKNOWNF.ILE"

# Characters that can never appear in a filename on the platforms patches are applied on
INVALID_FILENAME_CHARS = frozenset('"<>|:*?\\/' + "".join(chr(c) for c in range(32)))


def _clean_segment(segment: str) -> str:
    return "".join(
        c
        for c in segment
        if c.isascii()
        and c not in INVALID_FILENAME_CHARS
        and not c.isspace()
        and not unicodedata.category(c).startswith("P")
    )


def normalize_target_name(value: str | None) -> str:
    """Convert an arbitrary filename into an 8.3 style target identifier

    The name segment is limited to 9 characters (7 characters and a ``~1``
    marker when truncated), the extension to 3 characters. Any input that
    cleans down to an empty name results in ``UNKNOWN_TARGET_NAME``.
    """
    if not value:
        return UNKNOWN_TARGET_NAME

    name, sep, ext = value.upper().rpartition(".")
    if not sep:
        name, ext = ext, ""

    name = _clean_segment(name)
    ext = _clean_segment(ext)[:3]

    if len(name) > 9:
        name = f"{name[:7]}~1"

    if name == "":
        return UNKNOWN_TARGET_NAME
    if ext == "":
        return name
    return f"{name}.{ext}"


def normalize_comment(value: str | None) -> str | None:
    """Blank comments are dropped, everything else must survive UTF-8"""
    if value is None or value.strip() == "":
        return None
    return value.encode("utf-8", errors="replace").decode("utf-8")
