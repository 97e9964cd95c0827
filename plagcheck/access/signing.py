"""Signed links to reports and originals.

A shareable URL carries ``sig = base64url(HMAC-SHA256(secret, payload))`` over
the resource kind and document id, so guessing another document's id in a
URL does not grant access to it.
"""

import base64
import binascii
import hashlib
import hmac
from typing import Literal

ResourceKind = Literal["report", "original"]

PAYLOAD_PREFIX = "report-access"
MIN_SECRET_LENGTH = 16
MAX_SIGNATURE_LENGTH = 200
DEV_SECRET = "dev-secret-change-in-production"


def resolve_secret(secret: str | None) -> str:
    """Use the configured secret if it is long enough, otherwise the dev secret."""
    if secret and len(secret) >= MIN_SECRET_LENGTH:
        return secret
    return DEV_SECRET


def sign_document_access(kind: ResourceKind, document_id: int, secret: str | None) -> str:
    payload = f"{PAYLOAD_PREFIX}:{kind}:{int(document_id)}".encode()
    digest = hmac.new(resolve_secret(secret).encode(), payload, hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def verify_document_access(
    kind: ResourceKind,
    document_id: int,
    signature: str,
    secret: str | None,
) -> bool:
    """Constant-time check of a signature produced by ``sign_document_access``."""
    if not signature or len(signature) > MAX_SIGNATURE_LENGTH:
        return False
    expected = sign_document_access(kind, document_id, secret)
    try:
        given = _b64url_decode(signature)
    except (binascii.Error, ValueError):
        return False
    return hmac.compare_digest(given, _b64url_decode(expected))


def _b64url_decode(value: str) -> bytes:
    padded = value + "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))
