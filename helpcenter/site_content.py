"""
Featured cards, footer link sections and the site settings singleton.

Unlike categories and FAQs, the card and footer collections may be absent
from older documents; listing treats that as empty.
"""

from __future__ import annotations

import logging

from helpcenter.errors import MissingFields, NotFound
from helpcenter.merge import apply_patch
from helpcenter.schemas import (
    FeaturedCardCreate,
    FeaturedCardPatch,
    FooterItemCreate,
    FooterItemPatch,
    FooterSectionCreate,
    FooterSectionPatch,
    SettingsPatch,
)
from helpcenter.store import DocumentStore, new_id, sort_by_order

logger = logging.getLogger(__name__)

CARD_DEFAULTS = {"icon": "star", "link": "#", "color": "#6366f1"}
SETTINGS_DEFAULTS = {"supportLink": "", "supportLabel": ""}


def _with_sorted_items(section: dict) -> dict:
    return {**section, "items": sort_by_order(section.get("items") or [])}


def _find_by_id(items: list[dict], item_id: str) -> dict | None:
    return next((item for item in items if item.get("id") == item_id), None)


class SiteContentService:
    def __init__(self, store: DocumentStore):
        self.store = store

    # Featured cards

    def list_featured_cards(self) -> list[dict]:
        doc = self.store.load()
        return sort_by_order(doc.get("featuredCards") or [])

    def get_featured_card(self, card_id: str) -> dict:
        card = _find_by_id(self.store.load().get("featuredCards") or [], card_id)
        if card is None:
            raise NotFound("Card not found")
        return card

    def create_featured_card(self, payload: FeaturedCardCreate) -> dict:
        if not payload.title or not payload.description:
            raise MissingFields("Title and description are required")
        with self.store.transaction() as doc:
            cards = doc.setdefault("featuredCards", [])
            card = {
                "id": new_id(),
                "title": payload.title,
                "description": payload.description,
                "icon": payload.icon or CARD_DEFAULTS["icon"],
                "link": payload.link or CARD_DEFAULTS["link"],
                "color": payload.color or CARD_DEFAULTS["color"],
                "order": len(cards) + 1,
            }
            cards.append(card)
        logger.info("Created featured card %s", card["id"])
        return card

    def update_featured_card(self, card_id: str, patch: FeaturedCardPatch) -> dict:
        with self.store.transaction() as doc:
            card = _find_by_id(doc.setdefault("featuredCards", []), card_id)
            if card is None:
                raise NotFound("Card not found")
            apply_patch(card, patch)
        return card

    def delete_featured_card(self, card_id: str) -> None:
        with self.store.transaction() as doc:
            if "featuredCards" not in doc:
                raise NotFound("Card not found")
            doc["featuredCards"] = [c for c in doc["featuredCards"] if c.get("id") != card_id]
        logger.info("Deleted featured card %s", card_id)

    # Footer sections

    def list_footer_sections(self) -> list[dict]:
        doc = self.store.load()
        return [_with_sorted_items(s) for s in sort_by_order(doc.get("footerLinks") or [])]

    def get_footer_section(self, section_id: str) -> dict:
        section = _find_by_id(self.store.load().get("footerLinks") or [], section_id)
        if section is None:
            raise NotFound("Section not found")
        return _with_sorted_items(section)

    def create_footer_section(self, payload: FooterSectionCreate) -> dict:
        if not payload.title:
            raise MissingFields("Title is required")
        with self.store.transaction() as doc:
            sections = doc.setdefault("footerLinks", [])
            section = {
                "id": new_id(),
                "title": payload.title,
                "order": len(sections) + 1,
                "items": [],
            }
            sections.append(section)
        logger.info("Created footer section %s", section["id"])
        return section

    def update_footer_section(self, section_id: str, patch: FooterSectionPatch) -> dict:
        with self.store.transaction() as doc:
            section = _find_by_id(doc.setdefault("footerLinks", []), section_id)
            if section is None:
                raise NotFound("Section not found")
            apply_patch(section, patch)
        return _with_sorted_items(section)

    def delete_footer_section(self, section_id: str) -> None:
        with self.store.transaction() as doc:
            if "footerLinks" not in doc:
                raise NotFound("Section not found")
            doc["footerLinks"] = [s for s in doc["footerLinks"] if s.get("id") != section_id]
        logger.info("Deleted footer section %s", section_id)

    # Footer items

    def _section_for_update(self, doc: dict, section_id: str) -> dict:
        section = _find_by_id(doc.get("footerLinks") or [], section_id)
        if section is None:
            raise NotFound("Section not found")
        return section

    def create_footer_item(self, section_id: str, payload: FooterItemCreate) -> dict:
        if not payload.label or not payload.href:
            raise MissingFields("Label and href are required")
        with self.store.transaction() as doc:
            section = self._section_for_update(doc, section_id)
            items = section.setdefault("items", [])
            item = {
                "id": new_id(),
                "label": payload.label,
                "href": payload.href,
                "order": len(items) + 1,
            }
            items.append(item)
        return item

    def update_footer_item(
        self, section_id: str, item_id: str, patch: FooterItemPatch
    ) -> dict:
        with self.store.transaction() as doc:
            section = self._section_for_update(doc, section_id)
            item = _find_by_id(section.get("items") or [], item_id)
            if item is None:
                raise NotFound("Link not found")
            apply_patch(item, patch)
        return item

    def delete_footer_item(self, section_id: str, item_id: str) -> None:
        with self.store.transaction() as doc:
            section = self._section_for_update(doc, section_id)
            items = section.get("items") or []
            if _find_by_id(items, item_id) is None:
                raise NotFound("Link not found")
            section["items"] = [i for i in items if i.get("id") != item_id]

    # Settings

    def get_settings(self) -> dict:
        stored = self.store.load().get("settings") or {}
        return {**SETTINGS_DEFAULTS, **stored}

    def update_settings(self, patch: SettingsPatch) -> dict:
        with self.store.transaction() as doc:
            settings = {**SETTINGS_DEFAULTS, **(doc.get("settings") or {})}
            doc["settings"] = apply_patch(settings, patch)
        return doc["settings"]
