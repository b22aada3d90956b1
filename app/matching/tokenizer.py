from __future__ import annotations

import re

BASIC = "basic"
STRICT = "strict"

# basic keeps tech-ish punctuation so tokens like c++, c# and node.js survive
_DISALLOWED = {
    BASIC: re.compile(r"[^a-z0-9\s+#.]"),
    STRICT: re.compile(r"[^\w\s]", re.ASCII),
}


def tokenize(text: str | None, pattern: str = BASIC) -> list[str]:
    """Lower-case, blank out disallowed characters and split on whitespace runs.

    Source order and duplicates are preserved. ``None`` or empty input yields
    an empty list.
    """
    if not text:
        return []
    try:
        disallowed = _DISALLOWED[pattern]
    except KeyError:
        raise ValueError(f"Unknown token pattern '{pattern}'. Expected one of: {', '.join(_DISALLOWED)}") from None
    cleaned = disallowed.sub(" ", str(text).lower())
    return [token for token in cleaned.split() if token]
