"""
Security helpers for password hashing and bearer-token authentication.

Tokens are JWT-shaped (``header.payload.signature``, each part
base64url encoded) and signed with HMAC‑SHA256 using the configured
secret.  The payload carries the account ``id`` and ``email``, an
optional ``type`` claim (``"admin"`` or ``"customer"``) and the
``iat``/``exp`` timestamps.  There is no revocation list: a token is
valid while its signature checks out and it has not expired.

Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a per-password salt,
stored as ``"<salt hex>$<hash hex>"``.  bcrypt hashes left by accounts
created before the switch still verify and are rehashed on login.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Any, Dict, Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .exceptions import InvalidToken, MissingToken, Unauthorized

logger = logging.getLogger(__name__)

ADMIN = "admin"
CUSTOMER = "customer"

PBKDF2_ITERATIONS = 100_000
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed token carrying ``data`` as its claims.

    The claims are extended with ``iat`` and ``exp`` (UNIX
    timestamps).  Clients send the token back in the
    ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed, at minimum ``id`` and ``email``.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        The signed token.
    """
    to_encode = data.copy()
    now = int(time.time())
    exp_seconds = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    to_encode["iat"] = now
    to_encode["exp"] = now + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":"), default=str).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify a token and return its claims.

    Raises
    ------
    InvalidToken
        If the token is malformed, its signature does not match or it
        has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise InvalidToken("jwt malformed")
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
    except (binascii.Error, ValueError) as exc:
        raise InvalidToken("jwt malformed") from exc
    # Constant‑time comparison to prevent timing attacks
    if not hmac.compare_digest(expected_sig, actual_sig):
        raise InvalidToken("invalid signature")
    try:
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (binascii.Error, ValueError) as exc:
        raise InvalidToken("jwt malformed") from exc
    if not isinstance(data, dict):
        raise InvalidToken("jwt malformed")
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or exp < time.time():
        raise InvalidToken("jwt expired")
    return data


security = HTTPBearer(auto_error=False)


def get_current_claims(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, Any]:
    """Dependency that returns the verified claims of the request's token.

    Any account type is accepted.  A request without a bearer token
    fails with ``MissingToken``; a bad token with ``InvalidToken``.
    Both surface as HTTP 401.
    """
    if credentials is None or not credentials.credentials:
        raise MissingToken()
    return decode_access_token(credentials.credentials)


def get_optional_claims(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Optional[Dict[str, Any]]:
    """Like ``get_current_claims`` but returns ``None`` when no token is sent."""
    if credentials is None or not credentials.credentials:
        return None
    return decode_access_token(credentials.credentials)


def require_admin(claims: Dict[str, Any] = Depends(get_current_claims)) -> Dict[str, Any]:
    """Dependency for admin-gated routes: the token must carry ``type == "admin"``."""
    if claims.get("type") != ADMIN:
        logger.info("Rejected non-admin token for %s", claims.get("email"))
        raise Unauthorized()
    return claims


def require_customer(claims: Dict[str, Any] = Depends(get_current_claims)) -> Dict[str, Any]:
    """Dependency for a customer's own records: ``type == "customer"``."""
    if claims.get("type") != CUSTOMER:
        logger.info("Rejected non-customer token for %s", claims.get("email"))
        raise Unauthorized()
    return claims


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    result contains the salt and hash in hex separated by ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def is_bcrypt_hash(hashed_password: Optional[str]) -> bool:
    """True for ``$2a$``/``$2b$``/``$2y$`` hashes written by bcrypt."""
    return isinstance(hashed_password, str) and hashed_password.startswith(BCRYPT_PREFIXES)


def _verify_bcrypt(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored bcrypt hash is malformed")
        return False


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash.

    PBKDF2 ``salt$hash`` values are compared in constant time.  Hashes
    carried over from accounts created with bcrypt are checked with
    ``bcrypt.checkpw``.  A malformed stored value never matches.
    """
    if is_bcrypt_hash(hashed_password):
        return _verify_bcrypt(plain_password, hashed_password)
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


# Compared against when an account lookup misses so that unknown emails
# take as long to reject as wrong passwords.
_DUMMY_HASH = hash_password(os.urandom(8).hex())


def check_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """``verify_password`` that also burns the same time when there is no account."""
    if hashed_password is None:
        verify_password(plain_password, _DUMMY_HASH)
        return False
    return verify_password(plain_password, hashed_password)
