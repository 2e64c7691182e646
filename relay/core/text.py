from __future__ import annotations


def to_well_formed(text: str) -> str:
    """Replace lone surrogates (e.g. from a JSON `"\\ud800"` escape) with U+FFFD.

    The result always encodes as UTF-8. Valid text comes back unchanged; this is the
    same substitution a browser TextEncoder applies.
    """

    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    return text
