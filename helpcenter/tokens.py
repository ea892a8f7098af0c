"""
Bearer token persistence on top of a full-document store.

The token document maps each opaque token to `{email, expiresAt}` where
`expiresAt` is epoch milliseconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from helpcenter.store import DocumentStore


@dataclass(frozen=True)
class TokenRecord:
    email: str
    expires_at: int

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.expires_at

    def as_dict(self) -> dict:
        return {"email": self.email, "expiresAt": self.expires_at}

    @classmethod
    def from_dict(cls, data: dict) -> "TokenRecord":
        return cls(email=data.get("email", ""), expires_at=int(data.get("expiresAt", 0)))


class TokenStore:
    """Token map persisted through a DocumentStore whose default is `{}`."""

    def __init__(self, backend: DocumentStore):
        self.backend = backend

    def get(self, token: str) -> Optional[TokenRecord]:
        data = self.backend.load().get(token)
        if not isinstance(data, dict):
            return None
        return TokenRecord.from_dict(data)

    def put(self, token: str, record: TokenRecord) -> None:
        with self.backend.transaction() as tokens:
            tokens[token] = record.as_dict()

    def delete(self, token: str) -> None:
        with self.backend.transaction() as tokens:
            tokens.pop(token, None)

    def purge_expired(self, now_ms: int) -> int:
        with self.backend.transaction() as tokens:
            expired = [
                token
                for token, data in tokens.items()
                if not isinstance(data, dict)
                or TokenRecord.from_dict(data).is_expired(now_ms)
            ]
            for token in expired:
                del tokens[token]
        return len(expired)
