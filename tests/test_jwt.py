"""Test JWT decoding and HS256 signatures."""

import json

import pytest

from structconv.errors import ParseFailure
from structconv.jwt import (
    base64url_decode,
    base64url_encode,
    decode_jwt,
    format_jwt,
    is_valid_jwt,
    sign_hs256,
    verify_hmac_signature,
)

# Well-known HS256 example token, signed with "your-256-bit-secret".
TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiaWF0IjoxNTE2MjM5MDIyfQ"
    ".SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"
)
SECRET = "your-256-bit-secret"


def test_base64url_alphabet_and_padding():
    assert base64url_encode(b"\xfb\xff") == "-_8"
    assert base64url_decode("-_8") == b"\xfb\xff"
    assert base64url_decode("YQ") == b"a"
    assert base64url_decode("YWI") == b"ab"
    assert base64url_decode("YWJj") == b"abc"


def test_base64url_decode_rejects_bad_length():
    with pytest.raises(ValueError):
        base64url_decode("YWJjZ")


def test_is_valid_jwt():
    assert is_valid_jwt(TOKEN)
    assert is_valid_jwt("a.b.c")
    assert not is_valid_jwt("")
    assert not is_valid_jwt("a.b")
    assert not is_valid_jwt("a.b.c.d")


def test_decode_jwt():
    decoded = decode_jwt(TOKEN)
    assert decoded["HEADER"] == {"alg": "HS256", "typ": "JWT"}
    assert decoded["PAYLOAD"] == {"sub": "1234567890", "name": "John Doe", "iat": 1516239022}
    assert decoded["SIGNATURE"] == "SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"


def test_format_jwt_is_indented_json():
    text = format_jwt(TOKEN)
    assert text.startswith('{\n  "HEADER": {')
    assert json.loads(text)["PAYLOAD"]["name"] == "John Doe"


def test_decode_jwt_wrong_part_count():
    with pytest.raises(ParseFailure, match="Expected 3 parts"):
        decode_jwt("abc.def")


def test_decode_jwt_bad_segments():
    with pytest.raises(ParseFailure, match="Failed to decode JWT sections"):
        decode_jwt("!!.@@.x")
    with pytest.raises(ParseFailure, match="Failed to decode JWT sections"):
        decode_jwt("bm90IGpzb24.bm90IGpzb24.x")


def test_verify_known_token():
    assert verify_hmac_signature(TOKEN, SECRET) is True
    assert verify_hmac_signature(TOKEN, "wrong") is False


def test_verify_tampered_payload():
    header, _, signature = TOKEN.split(".")
    forged = base64url_encode(b'{"sub":"1","admin":true}')
    assert verify_hmac_signature(f"{header}.{forged}.{signature}", SECRET) is False


def test_verify_never_raises():
    assert verify_hmac_signature("a.b", SECRET) is False
    assert verify_hmac_signature("", SECRET) is False
    assert verify_hmac_signature("é.b.c", SECRET) is False


def test_sign_then_verify_and_decode():
    token = sign_hs256({"name": "Zoë", "n": 1}, "s3cret", header={"kid": "k1"})
    assert verify_hmac_signature(token, "s3cret")
    decoded = decode_jwt(token)
    assert decoded["HEADER"] == {"alg": "HS256", "typ": "JWT", "kid": "k1"}
    assert decoded["PAYLOAD"] == {"name": "Zoë", "n": 1}
    assert "=" not in token


def test_verify_rejects_unencodable_text():
    header, payload, _ = TOKEN.split(".")
    assert verify_hmac_signature(f"{header}.{payload}.\udcff", SECRET) is False
    assert verify_hmac_signature(TOKEN, "\udcff") is False
