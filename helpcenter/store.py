"""
Full-document storage for the content and token JSON documents.

Every operation loads the whole document, mutates it in memory and writes it
back whole. Implementations exist for a JSON file on disk, an in-memory
dict (tests/dev) and a SQL table holding one JSON row per document.
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import ContextManager, Iterator, Optional, Protocol

from sqlalchemy import JSON, Column, Float, String, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from helpcenter.errors import DocumentStoreError

# Serialises read-modify-write cycles across request threads.
_WRITE_LOCK = threading.RLock()

CONTENT_COLLECTIONS = ("categories", "faqs", "featuredCards", "footerLinks")


class DocumentStore(Protocol):
    """Defines the operations handlers need from the document backend."""

    def load(self) -> dict:
        ...

    def save(self, doc: dict) -> None:
        ...

    def transaction(self) -> ContextManager[dict]:
        ...


def empty_content_document() -> dict:
    doc: dict = {name: [] for name in CONTENT_COLLECTIONS}
    doc["settings"] = {"supportLink": "", "supportLabel": ""}
    return doc


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sort_by_order(items: list[dict]) -> list[dict]:
    return sorted(items, key=lambda item: item.get("order", 0))


def require_collection(doc: dict, key: str) -> list[dict]:
    """Return a mandatory collection, failing loudly if the document lacks it."""
    items = doc.get(key)
    if not isinstance(items, list):
        raise DocumentStoreError(f"Document has no '{key}' collection")
    return items


class _TransactionMixin:
    @contextmanager
    def transaction(self) -> Iterator[dict]:
        """
        Load the document under the process-wide lock and save it if the
        block finishes without raising.
        """
        with _WRITE_LOCK:
            doc = self.load()
            yield doc
            self.save(doc)


class JsonFileDocumentStore(_TransactionMixin):
    """
    JSON file on disk. Writes go to a temp file that replaces the target,
    so a failed write leaves the previous file intact.
    """

    def __init__(self, path: str | os.PathLike, default: Optional[dict] = None):
        self.path = Path(path)
        self.default = default

    def load(self) -> dict:
        if not self.path.exists():
            if self.default is not None:
                return copy.deepcopy(self.default)
            raise DocumentStoreError(f"Document file not found: {self.path}")
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DocumentStoreError(f"Malformed JSON in {self.path}: {exc}") from exc
        except OSError as exc:
            raise DocumentStoreError(f"Cannot read {self.path}: {exc}") from exc

    def save(self, doc: dict) -> None:
        with _WRITE_LOCK:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(doc, f, ensure_ascii=False, indent=2)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
            except (OSError, TypeError, ValueError) as exc:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise DocumentStoreError(f"Cannot write {self.path}: {exc}") from exc


@dataclass
class InMemoryDocumentStore(_TransactionMixin):
    """Test double keeping the document in a dict."""

    document: Optional[dict] = None
    default: Optional[dict] = None
    saves: int = field(default=0)

    def load(self) -> dict:
        if self.document is None:
            if self.default is not None:
                return copy.deepcopy(self.default)
            raise DocumentStoreError("Document not initialised")
        return copy.deepcopy(self.document)

    def save(self, doc: dict) -> None:
        # Round-trip through JSON to mimic what the file store persists.
        self.document = json.loads(json.dumps(doc))
        self.saves += 1


Base = declarative_base()


class DocumentRow(Base):
    __tablename__ = "documents"

    name = Column(String, primary_key=True)
    body = Column(JSON, nullable=False)
    updated_at = Column(Float, nullable=False)


class SqlDocumentStore(_TransactionMixin):
    """
    SQLAlchemy-backed implementation keeping each named document as one JSON
    row. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str, name: str, default: Optional[dict] = None):
        if not database_url:
            raise ValueError("database_url is required for SqlDocumentStore")
        self.name = name
        self.default = default
        self.engine = create_engine(database_url, future=True, pool_pre_ping=True)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def load(self) -> dict:
        with self.Session() as session:
            row = session.get(DocumentRow, self.name)
            if row is None:
                if self.default is not None:
                    return copy.deepcopy(self.default)
                raise DocumentStoreError(f"Document '{self.name}' not found")
            return copy.deepcopy(row.body)

    def save(self, doc: dict) -> None:
        with _WRITE_LOCK, self.Session() as session:
            row = session.get(DocumentRow, self.name)
            if row:
                row.body = copy.deepcopy(doc)
                row.updated_at = time.time()
            else:
                session.add(
                    DocumentRow(name=self.name, body=copy.deepcopy(doc), updated_at=time.time())
                )
            session.commit()
