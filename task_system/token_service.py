"""
Signed bearer tokens carrying the caller's identity.

Tokens are HS256 JWTs. The claims are trusted as of issuance: there is no
revocation list, so a token stays usable until its ``exp`` passes.
"""

import base64
import binascii
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from task_system.errors import TokenInvalid
from task_system.schemas import UserDTO

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
MIN_KEY_BYTES = 32  # HS256 needs a 256-bit secret


def decode_signing_key(encoded: str) -> bytes:
    try:
        key = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("token signing key must be valid base64") from e
    if len(key) < MIN_KEY_BYTES:
        raise ValueError(f"token signing key must be at least {MIN_KEY_BYTES} bytes, got {len(key)}")
    return key


class TokenService:
    def __init__(self, signing_key: str, lifetime: timedelta):
        self._key = decode_signing_key(signing_key)
        self.lifetime = lifetime

    def issue(self, user) -> str:
        """Sign a token for ``user`` (any object with id, nickname, email and role)."""
        now = datetime.now(timezone.utc)
        claims = {
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "sub": user.nickname,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(claims, self._key, algorithm=ALGORITHM)

    def decode_claims(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._key, algorithms=[ALGORITHM])
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            raise TokenInvalid(str(e)) from e

    def extract_subject(self, token: str) -> str:
        return self.decode_claims(token)["sub"]

    def extract_expiration(self, token: str) -> datetime:
        return datetime.fromtimestamp(self.decode_claims(token)["exp"], tz=timezone.utc)

    def extract_user(self, token: str) -> UserDTO:
        claims = self.decode_claims(token)
        try:
            return UserDTO(
                id=claims["id"],
                nickname=claims["sub"],
                email=claims["email"],
                role=claims["role"],
            )
        except (KeyError, ValueError) as e:
            raise TokenInvalid(f"token is missing identity claims: {e}") from e

    def is_valid(self, token: str, expected_subject: str) -> bool:
        try:
            claims = self.decode_claims(token)
        except TokenInvalid:
            return False
        expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
        return claims.get("sub") == expected_subject and expires > datetime.now(timezone.utc)
