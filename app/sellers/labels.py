"""
Source label derivation.

A label is the key a fetched sellers.json document is stored under in the
combined output file. It is derived from the source URL: the scheme prefix
(``http://`` / ``https://``) and every ``www.`` are each replaced by a single
underscore, every other character outside ``[A-Za-z0-9]`` becomes an
underscore, and leading underscores are dropped::

    https://www.philo.com/sellers.json -> philo_com_sellers_json
"""

from __future__ import annotations

import re
from collections.abc import Container

_LABEL_PATTERN = re.compile(r"https?://|www\.|[^a-zA-Z0-9]")


def sanitize_label(url: str) -> str:
    """
    Return the deterministic label for a source URL.
    """

    return _LABEL_PATTERN.sub("_", url).lstrip("_")


def assign_label(url: str, taken: Container[str]) -> str:
    """
    Return a label for ``url`` that is not already in ``taken``.

    Colliding labels get a numeric suffix, starting at ``_2``.
    """

    base = sanitize_label(url)
    if base not in taken:
        return base

    suffix = 2
    while f"{base}_{suffix}" in taken:
        suffix += 1
    return f"{base}_{suffix}"
