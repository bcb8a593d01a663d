"""Canonical JSON serialization.

Used for every byte-stable output: written diff reports, snapshot
fingerprints, test snapshots.
"""

import json
from typing import Any, Optional


def canonical_dumps(obj: Any, indent: Optional[int] = None) -> str:
    """
    Serialize ``obj`` deterministically.

    Rules:
    - Sorted keys
    - Stable separators ("," and ":" when compact)
    - Non-ASCII kept as UTF-8
    - Lists keep their order (callers must pass lists already in a fixed order)

    Args:
        obj: JSON-compatible object
        indent: Pretty-print indentation; None for the compact canonical form

    Returns:
        JSON string
    """
    if indent is None:
        return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(obj, sort_keys=True, indent=indent, ensure_ascii=False)
