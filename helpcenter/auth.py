"""
Admin authentication: one static credential pair minting random bearer
tokens that expire after a fixed TTL.
"""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from helpcenter.errors import InvalidCredentials, MissingFields
from helpcenter.tokens import TokenRecord, TokenStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class IdentityProvider(Protocol):
    def authenticate(self, email: str, password: str) -> bool:
        ...


@dataclass(frozen=True)
class StaticCredentialProvider:
    """Single operator identity compared by exact string match."""

    email: str
    password: str

    def authenticate(self, email: str, password: str) -> bool:
        return email == self.email and password == self.password


@dataclass(frozen=True)
class AuthSession:
    token: str
    email: str
    expires_at: int


@dataclass(frozen=True)
class VerifyResult:
    valid: bool
    email: Optional[str] = None
    reason: Optional[str] = None


def extract_bearer_token(header: Optional[str]) -> Optional[str]:
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):]


class AuthService:
    def __init__(
        self,
        tokens: TokenStore,
        identity: IdentityProvider,
        ttl_seconds: int = 24 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ):
        self.tokens = tokens
        self.identity = identity
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def login(self, email: Optional[str], password: Optional[str]) -> AuthSession:
        if not email or not password:
            raise MissingFields("Email and password are required")
        if not self.identity.authenticate(email, password):
            logger.warning("Rejected login attempt for %s", email)
            raise InvalidCredentials("Invalid credentials")

        token = secrets.token_hex(32)
        expires_at = self._now_ms() + self.ttl_seconds * 1000
        self.tokens.put(token, TokenRecord(email=email, expires_at=expires_at))
        logger.info("Issued admin token for %s", email)
        return AuthSession(token=token, email=email, expires_at=expires_at)

    def logout(self, token: Optional[str]) -> None:
        if token:
            self.tokens.delete(token)

    def verify(self, token: Optional[str]) -> VerifyResult:
        if not token:
            return VerifyResult(valid=False, reason="Token not provided")
        record = self.tokens.get(token)
        if record is None:
            return VerifyResult(valid=False, reason="Invalid token")
        if record.is_expired(self._now_ms()):
            self.tokens.delete(token)
            return VerifyResult(valid=False, reason="Token expired")
        return VerifyResult(valid=True, email=record.email)

    def purge_expired(self) -> int:
        return self.tokens.purge_expired(self._now_ms())
