"""
Categories, FAQs and FAQ search over the content document.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Callable, Iterable

from helpcenter.errors import Conflict, InvalidReference, MissingFields, NotFound
from helpcenter.merge import apply_patch
from helpcenter.schemas import (
    CategoryCreate,
    CategoryPatch,
    FaqCreate,
    FaqPatch,
    ReorderItem,
)
from helpcenter.store import (
    DocumentStore,
    new_id,
    require_collection,
    sort_by_order,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2


def slugify(name: str) -> str:
    """Lowercase, whitespace runs to hyphens, diacritics stripped."""
    slug = re.sub(r"\s+", "-", name.lower())
    decomposed = unicodedata.normalize("NFD", slug)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _find(items: Iterable[dict], **criteria) -> dict | None:
    for item in items:
        if all(item.get(key) == value for key, value in criteria.items()):
            return item
    return None


class FaqService:
    def __init__(self, store: DocumentStore, now: Callable[[], str] = utc_now_iso):
        self.store = store
        self.now = now

    # Categories

    def list_categories(self) -> list[dict]:
        doc = self.store.load()
        return sort_by_order(require_collection(doc, "categories"))

    def get_category(self, category_id: str) -> dict:
        doc = self.store.load()
        category = _find(require_collection(doc, "categories"), id=category_id)
        if category is None:
            raise NotFound("Category not found")
        return category

    def get_category_by_slug(self, slug: str) -> dict:
        doc = self.store.load()
        # Slugs are not unique; the first stored match wins.
        category = _find(require_collection(doc, "categories"), slug=slug)
        if category is None:
            raise NotFound("Category not found")
        return category

    def create_category(self, payload: CategoryCreate) -> dict:
        if not payload.name:
            raise MissingFields("Name is required")
        with self.store.transaction() as doc:
            categories = require_collection(doc, "categories")
            category = {
                "id": new_id(),
                "name": payload.name,
                "slug": payload.slug or slugify(payload.name),
                "order": len(categories) + 1,
            }
            categories.append(category)
        logger.info("Created category %s (%s)", category["id"], category["slug"])
        return category

    def update_category(self, category_id: str, patch: CategoryPatch) -> dict:
        with self.store.transaction() as doc:
            category = _find(require_collection(doc, "categories"), id=category_id)
            if category is None:
                raise NotFound("Category not found")
            apply_patch(category, patch)
        return category

    def delete_category(self, category_id: str) -> None:
        with self.store.transaction() as doc:
            categories = require_collection(doc, "categories")
            if _find(categories, id=category_id) is None:
                raise NotFound("Category not found")
            if _find(require_collection(doc, "faqs"), categoryId=category_id):
                raise Conflict("Cannot delete a category that still has FAQs")
            doc["categories"] = [c for c in categories if c.get("id") != category_id]
        logger.info("Deleted category %s", category_id)

    # FAQs

    def list_faqs(self) -> list[dict]:
        doc = self.store.load()
        return sort_by_order(require_collection(doc, "faqs"))

    def list_faqs_by_category(self, category_id: str) -> list[dict]:
        doc = self.store.load()
        faqs = require_collection(doc, "faqs")
        return sort_by_order([f for f in faqs if f.get("categoryId") == category_id])

    def grouped_faqs(self) -> list[dict]:
        doc = self.store.load()
        faqs = require_collection(doc, "faqs")
        grouped = []
        for category in sort_by_order(require_collection(doc, "categories")):
            members = [f for f in faqs if f.get("categoryId") == category["id"]]
            grouped.append({**category, "faqs": sort_by_order(members)})
        return grouped

    def get_faq(self, faq_id: str) -> dict:
        doc = self.store.load()
        faq = _find(require_collection(doc, "faqs"), id=faq_id)
        if faq is None:
            raise NotFound("FAQ not found")
        return faq

    def create_faq(self, payload: FaqCreate) -> dict:
        if not payload.categoryId or not payload.question or not payload.answer:
            raise MissingFields("Category, question and answer are required")
        with self.store.transaction() as doc:
            if _find(require_collection(doc, "categories"), id=payload.categoryId) is None:
                raise InvalidReference("Category not found")
            faqs = require_collection(doc, "faqs")
            siblings = [f.get("order", 0) for f in faqs if f.get("categoryId") == payload.categoryId]
            now = self.now()
            faq = {
                "id": new_id(),
                "categoryId": payload.categoryId,
                "question": payload.question,
                "answer": payload.answer,
                "order": max(siblings) + 1 if siblings else 1,
                "createdAt": now,
                "updatedAt": now,
            }
            faqs.append(faq)
        logger.info("Created FAQ %s in category %s", faq["id"], faq["categoryId"])
        return faq

    def update_faq(self, faq_id: str, patch: FaqPatch) -> dict:
        with self.store.transaction() as doc:
            faq = _find(require_collection(doc, "faqs"), id=faq_id)
            if faq is None:
                raise NotFound("FAQ not found")
            apply_patch(faq, patch)
            faq["updatedAt"] = self.now()
        return faq

    def delete_faq(self, faq_id: str) -> None:
        with self.store.transaction() as doc:
            faqs = require_collection(doc, "faqs")
            if _find(faqs, id=faq_id) is None:
                raise NotFound("FAQ not found")
            doc["faqs"] = [f for f in faqs if f.get("id") != faq_id]
        logger.info("Deleted FAQ %s", faq_id)

    def reorder_faqs(self, items: list[ReorderItem] | None) -> int:
        """
        Apply `{id, order}` pairs and save once. Unknown ids are skipped;
        returns how many FAQs were updated.
        """
        if items is None:
            raise MissingFields("Items must be a list")
        applied = 0
        with self.store.transaction() as doc:
            faqs = require_collection(doc, "faqs")
            for item in items:
                faq = _find(faqs, id=item.id)
                if faq is None:
                    continue
                faq["order"] = item.order
                faq["updatedAt"] = self.now()
                applied += 1
        return applied

    def search_faqs(self, query: str | None) -> list[dict]:
        if not query or len(query) < MIN_SEARCH_LENGTH:
            return []
        term = query.lower()
        doc = self.store.load()
        results = [
            faq
            for faq in require_collection(doc, "faqs")
            if term in faq.get("question", "").lower()
            or term in faq.get("answer", "").lower()
        ]
        return sort_by_order(results)
