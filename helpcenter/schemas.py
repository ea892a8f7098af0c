"""
Pydantic schemas for the help center API.

Field names follow the camelCase keys stored in the JSON document. Create
payloads keep every field optional so that missing and empty values surface
as `MissingFields` errors instead of validation errors; patch payloads
model "field provided" as a non-None member.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class Category(BaseModel):
    id: str
    name: str
    slug: str
    order: int


class Faq(BaseModel):
    id: str
    categoryId: str
    question: str
    answer: str
    order: int
    createdAt: str
    updatedAt: str


class CategoryWithFaqs(Category):
    faqs: list[Faq]


class FeaturedCard(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    link: str
    color: str
    order: int


class FooterLinkItem(BaseModel):
    id: str
    label: str
    href: str
    order: int


class FooterSection(BaseModel):
    id: str
    title: str
    order: int
    items: list[FooterLinkItem]


class SiteSettings(BaseModel):
    supportLink: str = ""
    supportLabel: str = ""


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None


class CategoryPatch(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    order: Optional[int] = None


class FaqCreate(BaseModel):
    categoryId: Optional[str] = None
    question: Optional[str] = None
    answer: Optional[str] = None


class FaqPatch(BaseModel):
    categoryId: Optional[str] = None
    question: Optional[str] = None
    answer: Optional[str] = None
    order: Optional[int] = None


class ReorderItem(BaseModel):
    id: str
    order: int


class ReorderRequest(BaseModel):
    items: Optional[list[ReorderItem]] = None


class FeaturedCardCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    link: Optional[str] = None
    color: Optional[str] = None


class FeaturedCardPatch(FeaturedCardCreate):
    order: Optional[int] = None


class FooterSectionCreate(BaseModel):
    title: Optional[str] = None


class FooterSectionPatch(FooterSectionCreate):
    order: Optional[int] = None


class FooterItemCreate(BaseModel):
    label: Optional[str] = None
    href: Optional[str] = None


class FooterItemPatch(FooterItemCreate):
    order: Optional[int] = None


class SettingsPatch(BaseModel):
    supportLink: Optional[str] = None
    supportLabel: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserInfo(BaseModel):
    email: str


class LoginResponse(BaseModel):
    success: Literal[True]
    token: str
    expiresAt: int
    user: UserInfo


class LogoutResponse(BaseModel):
    success: Literal[True]
    message: str


class VerifyResponse(BaseModel):
    valid: bool
    user: Optional[UserInfo] = None
    error: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: Literal["ok"]
    timestamp: str
