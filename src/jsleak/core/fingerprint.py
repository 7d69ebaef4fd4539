# SPDX-License-Identifier: MIT
"""
Fingerprint engine.

A fingerprint is a digest of a secret payload's canonical JSON form (sorted
keys, no insignificant whitespace). It depends only on the payload, never on
where the secret was seen, so the same credential found in two files maps to
the same finding.
"""
from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Union

from jsleak.core.payloads import SecretPayload

SUPPORTED_ALGORITHMS = {
    "SHA-256": "sha256",
    "SHA-512": "sha512",
}

DEFAULT_ALGORITHM = "SHA-512"


def canonicalize(payload: Union[SecretPayload, Dict[str, Any]]) -> str:
    """Serialize a payload to a stable string."""
    data = payload.to_dict() if isinstance(payload, SecretPayload) else payload
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_fingerprint(
    payload: Union[SecretPayload, Dict[str, Any]],
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """
    Compute the hex digest identifying a secret payload.

    Args:
        payload: Secret payload (or its plain dict form)
        algorithm: ``SHA-256`` or ``SHA-512``

    Returns:
        Lowercase hex digest

    Raises:
        ValueError: If the algorithm is not supported
    """
    name = SUPPORTED_ALGORITHMS.get(algorithm.upper())
    if name is None:
        raise ValueError(f"Unsupported fingerprint algorithm: {algorithm}")
    digest = hashlib.new(name)
    digest.update(canonicalize(payload).encode("utf-8"))
    return digest.hexdigest()
