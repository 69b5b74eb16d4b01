"""
Fireflies webhook signature checks.

Fireflies signs the raw request body with HMAC-SHA256 and sends the hex
digest in ``x-hub-signature``, optionally prefixed with ``sha256=``.
"""
from __future__ import annotations

import hashlib
import hmac

SIGNATURE_HEADER = "x-hub-signature"
SIGNATURE_PREFIX = "sha256="


def compute_signature(secret: str, body: bytes) -> str:
    return hmac.new(key=secret.encode("utf-8"), msg=body, digestmod=hashlib.sha256).hexdigest()


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Constant-time check of ``signature`` against the body's HMAC.

    Malformed (non-hex, wrong length) signatures are simply inauthentic.
    """
    if not secret or not signature:
        return False
    received = signature.strip()
    if received.lower().startswith(SIGNATURE_PREFIX):
        received = received[len(SIGNATURE_PREFIX):]
    try:
        bytes.fromhex(received)
    except ValueError:
        return False
    return hmac.compare_digest(received, compute_signature(secret, body))
