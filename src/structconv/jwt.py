"""
jwt.py

Decoding and HS256 signing/verification of JSON Web Tokens.

Only the compact serialization (``header.payload.signature``) is handled.
Segments use the base64url alphabet of RFC 4648 section 5 without padding;
padding is restored from the segment length on decode.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Dict, Mapping

from structconv.constants import JSON_INDENT
from structconv.errors import ParseFailure
from structconv.logging_setup import get_logger

log = get_logger(__name__)

_PADDING = {0: "", 2: "==", 3: "="}


def base64url_decode(segment: str) -> bytes:
    """Decode an unpadded base64url segment.

    Raises:
        ValueError: if the segment length or alphabet is not base64url.
    """
    padding = _PADDING.get(len(segment) % 4)
    if padding is None:
        raise ValueError("Illegal base64url string!")
    try:
        return base64.urlsafe_b64decode(segment + padding)
    except binascii.Error as e:
        raise ValueError(f"Illegal base64url string: {e}") from e


def base64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def is_valid_jwt(token: str) -> bool:
    """True for a non-empty string with exactly three dot-separated parts."""
    if not token:
        return False
    return len(token.split(".")) == 3


def _json_segment(segment: str) -> Any:
    return json.loads(base64url_decode(segment).decode("utf-8"))


def decode_jwt(token: str) -> Dict[str, Any]:
    """Split a token into its decoded header and payload.

    The signature is returned as the raw base64url segment.

    Raises:
        ParseFailure: if the token does not have three parts or a part is
            not base64url-encoded JSON.
    """
    parts = (token or "").strip().split(".")
    if len(parts) != 3:
        raise ParseFailure(
            "Invalid JWT format. Expected 3 parts separated by dots.", fmt="jwt"
        )
    try:
        header = _json_segment(parts[0])
        payload = _json_segment(parts[1])
    except ValueError as e:
        log.debug("JWT segment decode failed", error=str(e))
        raise ParseFailure(
            "Failed to decode JWT sections. Ensure input is a valid Base64Url encoded string.",
            fmt="jwt",
        ) from e
    return {"HEADER": header, "PAYLOAD": payload, "SIGNATURE": parts[2]}


def format_jwt(token: str, indent: int = JSON_INDENT) -> str:
    """Decoded token as indented JSON."""
    return json.dumps(decode_jwt(token), indent=indent, ensure_ascii=False)


def _hs256(signing_input: str, secret: str) -> str:
    digest = hmac.new(
        secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256
    ).digest()
    return base64url_encode(digest)


def sign_hs256(
    payload: Mapping[str, Any], secret: str, header: Mapping[str, Any] | None = None
) -> str:
    """Build a compact HS256 token for ``payload``."""
    head = {"alg": "HS256", "typ": "JWT"}
    if header:
        head.update(header)
    signing_input = ".".join(
        base64url_encode(json.dumps(part, separators=(",", ":")).encode("utf-8"))
        for part in (head, payload)
    )
    return f"{signing_input}.{_hs256(signing_input, secret)}"


def verify_hmac_signature(token: str, secret: str) -> bool:
    """Check an HS256 signature over ``header.payload``. Never raises."""
    parts = (token or "").strip().split(".")
    if len(parts) != 3:
        return False
    header_b64, payload_b64, signature_b64 = parts
    try:
        expected = _hs256(f"{header_b64}.{payload_b64}", secret)
        signature = signature_b64.encode("ascii")
    except UnicodeEncodeError:
        # a segment outside the base64url alphabet cannot have been signed
        return False
    return hmac.compare_digest(expected.encode("ascii"), signature)
