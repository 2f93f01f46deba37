# src/puptrack/core/text.py

from __future__ import annotations


def clean_text(raw: str) -> str:
    """
    Replace lone surrogates (e.g. from surrogateescape'd terminal input) with '?'.

    Everything that ends up in the snapshot or an export must be encodable as UTF-8.
    """
    return raw.encode("utf-8", "replace").decode("utf-8")
