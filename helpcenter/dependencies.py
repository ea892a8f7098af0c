"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header

from helpcenter.auth import AuthService, IdentityProvider, StaticCredentialProvider, extract_bearer_token
from helpcenter.config import get_settings
from helpcenter.errors import Unauthorized
from helpcenter.faqs import FaqService
from helpcenter.site_content import SiteContentService
from helpcenter.store import (
    DocumentStore,
    InMemoryDocumentStore,
    JsonFileDocumentStore,
    SqlDocumentStore,
    empty_content_document,
)
from helpcenter.tokens import TokenStore

_document_store: DocumentStore | None = None
_token_store: TokenStore | None = None


@dataclass(frozen=True)
class AuthenticatedUser:
    email: str


def get_document_store() -> DocumentStore:
    """
    Return a singleton content store. A missing content document is an error
    for the file and SQL backends.
    """
    global _document_store
    if _document_store:
        return _document_store

    settings = get_settings()
    if settings.use_in_memory_backends:
        _document_store = InMemoryDocumentStore(document=empty_content_document())
    elif settings.database_url:
        _document_store = SqlDocumentStore(settings.database_url, name="content")
    else:
        _document_store = JsonFileDocumentStore(settings.content_db_path)
    return _document_store


def get_token_store() -> TokenStore:
    global _token_store
    if _token_store:
        return _token_store

    settings = get_settings()
    if settings.use_in_memory_backends:
        backend = InMemoryDocumentStore(default={})
    elif settings.database_url:
        backend = SqlDocumentStore(settings.database_url, name="tokens", default={})
    else:
        backend = JsonFileDocumentStore(settings.tokens_db_path, default={})
    _token_store = TokenStore(backend)
    return _token_store


def get_identity_provider() -> IdentityProvider:
    settings = get_settings()
    return StaticCredentialProvider(
        email=settings.admin_email, password=settings.admin_password
    )


def get_auth_service(
    tokens: TokenStore = Depends(get_token_store),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> AuthService:
    return AuthService(
        tokens=tokens,
        identity=identity,
        ttl_seconds=get_settings().token_ttl_seconds,
    )


def get_faq_service(store: DocumentStore = Depends(get_document_store)) -> FaqService:
    return FaqService(store)


def get_site_content_service(
    store: DocumentStore = Depends(get_document_store),
) -> SiteContentService:
    return SiteContentService(store)


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    return extract_bearer_token(authorization)


def require_auth(
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """Reject the request unless it carries a live admin bearer token."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthorized("Unauthorized access")
    result = auth.verify(token)
    if not result.valid:
        raise Unauthorized(result.reason or "Invalid token")
    return AuthenticatedUser(email=result.email)
