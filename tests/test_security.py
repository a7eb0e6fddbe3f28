"""Tests for token signing/verification and password hashing."""

import base64
import json

import bcrypt
import pytest

from salon_booking_api.app.core.exceptions import InvalidToken
from salon_booking_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    is_bcrypt_hash,
    verify_password,
)


def test_token_round_trip_keeps_claims():
    token = create_access_token({"id": "abc", "email": "a@b.com", "type": "admin"})
    claims = decode_access_token(token)
    assert claims["id"] == "abc"
    assert claims["email"] == "a@b.com"
    assert claims["type"] == "admin"
    assert claims["exp"] > claims["iat"]


def test_expired_token_is_rejected():
    token = create_access_token({"id": "abc", "email": "a@b.com"}, expires_delta=-10)
    with pytest.raises(InvalidToken, match="expired"):
        decode_access_token(token)


def test_tampered_payload_is_rejected():
    token = create_access_token({"id": "abc", "email": "a@b.com", "type": "customer"})
    header, _, signature = token.split(".")
    forged = create_access_token({"id": "abc", "email": "a@b.com", "type": "admin"}).split(".")[1]
    with pytest.raises(InvalidToken, match="signature"):
        decode_access_token(f"{header}.{forged}.{signature}")


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b", "a.b.c.d"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_password_hash_verifies_only_the_hashed_password():
    hashed = hash_password("s3cret!")
    assert "$" in hashed
    assert verify_password("s3cret!", hashed)
    assert not verify_password("s3cret?", hashed)


def test_password_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


@pytest.mark.parametrize("stored", ["", "nodollar", "zz$zz", None])
def test_malformed_stored_hash_never_matches(stored):
    assert not verify_password("anything", stored)


def test_token_header_names_hs256():
    header = create_access_token({"id": "abc", "email": "a@b.com"}).split(".")[0]
    decoded = json.loads(base64.urlsafe_b64decode(header + "=" * (-len(header) % 4)))
    assert decoded == {"alg": "HS256", "typ": "JWT"}


@pytest.mark.parametrize("prefix", [b"2a", b"2b"])
def test_bcrypt_hashes_still_verify(prefix):
    stored = bcrypt.hashpw(b"legacy-pass", bcrypt.gensalt(rounds=4, prefix=prefix)).decode()
    assert is_bcrypt_hash(stored)
    assert verify_password("legacy-pass", stored)
    assert not verify_password("legacy-pass!", stored)


def test_pbkdf2_hash_is_not_taken_for_bcrypt():
    assert not is_bcrypt_hash(hash_password("s3cret!"))
    assert not verify_password("anything", "$2b$04$truncated")
