"""
HTTP routes for the help center API.

Reads are public; every mutating route requires an admin bearer token.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from helpcenter.auth import AuthService
from helpcenter.dependencies import (
    get_auth_service,
    get_bearer_token,
    get_faq_service,
    get_site_content_service,
    require_auth,
)
from helpcenter.faqs import FaqService
from helpcenter.schemas import (
    Category,
    CategoryCreate,
    CategoryPatch,
    CategoryWithFaqs,
    Faq,
    FaqCreate,
    FaqPatch,
    FeaturedCard,
    FeaturedCardCreate,
    FeaturedCardPatch,
    FooterItemCreate,
    FooterItemPatch,
    FooterLinkItem,
    FooterSection,
    FooterSectionCreate,
    FooterSectionPatch,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    MessageResponse,
    ReorderRequest,
    SettingsPatch,
    SiteSettings,
    UserInfo,
    VerifyResponse,
)
from helpcenter.site_content import SiteContentService

router = APIRouter()
admin = [Depends(require_auth)]


# ==================== AUTH ====================


@router.post("/auth/login", response_model=LoginResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    session = auth.login(payload.email, payload.password)
    return LoginResponse(
        success=True,
        token=session.token,
        expiresAt=session.expires_at,
        user=UserInfo(email=session.email),
    )


@router.post("/auth/logout", response_model=LogoutResponse)
def logout(
    token: Optional[str] = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
):
    auth.logout(token)
    return LogoutResponse(success=True, message="Logged out")


@router.get(
    "/auth/verify", response_model=VerifyResponse, response_model_exclude_none=True
)
def verify(
    response: Response,
    token: Optional[str] = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
):
    result = auth.verify(token)
    if not result.valid:
        response.status_code = 401
        return VerifyResponse(valid=False, error=result.reason)
    return VerifyResponse(valid=True, user=UserInfo(email=result.email))


# ==================== CATEGORIES ====================


@router.get("/categories", response_model=list[Category])
def list_categories(faqs: FaqService = Depends(get_faq_service)):
    return faqs.list_categories()


@router.get("/categories/slug/{slug}", response_model=Category)
def get_category_by_slug(slug: str, faqs: FaqService = Depends(get_faq_service)):
    return faqs.get_category_by_slug(slug)


@router.get("/categories/{category_id}", response_model=Category)
def get_category(category_id: str, faqs: FaqService = Depends(get_faq_service)):
    return faqs.get_category(category_id)


@router.post(
    "/categories", response_model=Category, status_code=201, dependencies=admin
)
def create_category(
    payload: CategoryCreate, faqs: FaqService = Depends(get_faq_service)
):
    return faqs.create_category(payload)


@router.put("/categories/{category_id}", response_model=Category, dependencies=admin)
def update_category(
    category_id: str,
    patch: CategoryPatch,
    faqs: FaqService = Depends(get_faq_service),
):
    return faqs.update_category(category_id, patch)


@router.delete(
    "/categories/{category_id}", response_model=MessageResponse, dependencies=admin
)
def delete_category(category_id: str, faqs: FaqService = Depends(get_faq_service)):
    faqs.delete_category(category_id)
    return MessageResponse(message="Category deleted")


# ==================== FAQS ====================


@router.get("/faqs", response_model=list[Faq])
def list_faqs(faqs: FaqService = Depends(get_faq_service)):
    return faqs.list_faqs()


@router.get("/faqs/grouped", response_model=list[CategoryWithFaqs])
def grouped_faqs(faqs: FaqService = Depends(get_faq_service)):
    return faqs.grouped_faqs()


@router.get("/faqs/category/{category_id}", response_model=list[Faq])
def list_faqs_by_category(
    category_id: str, faqs: FaqService = Depends(get_faq_service)
):
    return faqs.list_faqs_by_category(category_id)


@router.put("/faqs/reorder", response_model=MessageResponse, dependencies=admin)
def reorder_faqs(payload: ReorderRequest, faqs: FaqService = Depends(get_faq_service)):
    faqs.reorder_faqs(payload.items)
    return MessageResponse(message="FAQs reordered")


@router.get("/faqs/{faq_id}", response_model=Faq)
def get_faq(faq_id: str, faqs: FaqService = Depends(get_faq_service)):
    return faqs.get_faq(faq_id)


@router.post("/faqs", response_model=Faq, status_code=201, dependencies=admin)
def create_faq(payload: FaqCreate, faqs: FaqService = Depends(get_faq_service)):
    return faqs.create_faq(payload)


@router.put("/faqs/{faq_id}", response_model=Faq, dependencies=admin)
def update_faq(
    faq_id: str, patch: FaqPatch, faqs: FaqService = Depends(get_faq_service)
):
    return faqs.update_faq(faq_id, patch)


@router.delete("/faqs/{faq_id}", response_model=MessageResponse, dependencies=admin)
def delete_faq(faq_id: str, faqs: FaqService = Depends(get_faq_service)):
    faqs.delete_faq(faq_id)
    return MessageResponse(message="FAQ deleted")


@router.get("/search", response_model=list[Faq])
def search_faqs(
    q: Optional[str] = Query(None, description="Text searched in questions and answers"),
    faqs: FaqService = Depends(get_faq_service),
):
    return faqs.search_faqs(q)


# ==================== FEATURED CARDS ====================


@router.get("/featured-cards", response_model=list[FeaturedCard])
def list_featured_cards(site: SiteContentService = Depends(get_site_content_service)):
    return site.list_featured_cards()


@router.get("/featured-cards/{card_id}", response_model=FeaturedCard)
def get_featured_card(
    card_id: str, site: SiteContentService = Depends(get_site_content_service)
):
    return site.get_featured_card(card_id)


@router.post(
    "/featured-cards", response_model=FeaturedCard, status_code=201, dependencies=admin
)
def create_featured_card(
    payload: FeaturedCardCreate,
    site: SiteContentService = Depends(get_site_content_service),
):
    return site.create_featured_card(payload)


@router.put(
    "/featured-cards/{card_id}", response_model=FeaturedCard, dependencies=admin
)
def update_featured_card(
    card_id: str,
    patch: FeaturedCardPatch,
    site: SiteContentService = Depends(get_site_content_service),
):
    return site.update_featured_card(card_id, patch)


@router.delete(
    "/featured-cards/{card_id}", response_model=MessageResponse, dependencies=admin
)
def delete_featured_card(
    card_id: str, site: SiteContentService = Depends(get_site_content_service)
):
    site.delete_featured_card(card_id)
    return MessageResponse(message="Card deleted")


# ==================== SETTINGS ====================


@router.get("/settings", response_model=SiteSettings)
def get_site_settings(site: SiteContentService = Depends(get_site_content_service)):
    return site.get_settings()


@router.put("/settings", response_model=SiteSettings, dependencies=admin)
def update_site_settings(
    patch: SettingsPatch,
    site: SiteContentService = Depends(get_site_content_service),
):
    return site.update_settings(patch)


# ==================== FOOTER LINKS ====================


@router.get("/footer-links", response_model=list[FooterSection])
def list_footer_sections(site: SiteContentService = Depends(get_site_content_service)):
    return site.list_footer_sections()


@router.get("/footer-links/{section_id}", response_model=FooterSection)
def get_footer_section(
    section_id: str, site: SiteContentService = Depends(get_site_content_service)
):
    return site.get_footer_section(section_id)


@router.post(
    "/footer-links", response_model=FooterSection, status_code=201, dependencies=admin
)
def create_footer_section(
    payload: FooterSectionCreate,
    site: SiteContentService = Depends(get_site_content_service),
):
    return site.create_footer_section(payload)


@router.put(
    "/footer-links/{section_id}", response_model=FooterSection, dependencies=admin
)
def update_footer_section(
    section_id: str,
    patch: FooterSectionPatch,
    site: SiteContentService = Depends(get_site_content_service),
):
    return site.update_footer_section(section_id, patch)


@router.delete(
    "/footer-links/{section_id}", response_model=MessageResponse, dependencies=admin
)
def delete_footer_section(
    section_id: str, site: SiteContentService = Depends(get_site_content_service)
):
    site.delete_footer_section(section_id)
    return MessageResponse(message="Section deleted")


@router.post(
    "/footer-links/{section_id}/items",
    response_model=FooterLinkItem,
    status_code=201,
    dependencies=admin,
)
def create_footer_item(
    section_id: str,
    payload: FooterItemCreate,
    site: SiteContentService = Depends(get_site_content_service),
):
    return site.create_footer_item(section_id, payload)


@router.put(
    "/footer-links/{section_id}/items/{item_id}",
    response_model=FooterLinkItem,
    dependencies=admin,
)
def update_footer_item(
    section_id: str,
    item_id: str,
    patch: FooterItemPatch,
    site: SiteContentService = Depends(get_site_content_service),
):
    return site.update_footer_item(section_id, item_id, patch)


@router.delete(
    "/footer-links/{section_id}/items/{item_id}",
    response_model=MessageResponse,
    dependencies=admin,
)
def delete_footer_item(
    section_id: str,
    item_id: str,
    site: SiteContentService = Depends(get_site_content_service),
):
    site.delete_footer_item(section_id, item_id)
    return MessageResponse(message="Link deleted")
