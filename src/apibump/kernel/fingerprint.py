"""Content fingerprints for snapshots.

A fingerprint is the SHA-256 of the canonical JSON of a snapshot's model
dump. Strings are hashed exactly as given: names are compared by code point
when diffing, so two snapshots share a fingerprint only if they diff empty.
"""

import hashlib

from pydantic import BaseModel

from apibump._internal.canonical_json import canonical_dumps


def fingerprint(snapshot: BaseModel) -> str:
    """
    Compute the fingerprint of a snapshot (package, module or declaration).

    Returns:
        "sha256:<hex digest>"
    """
    payload = canonical_dumps(snapshot.model_dump(mode="json"))
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return f"sha256:{digest}"
