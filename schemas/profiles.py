# Pydantic Schemas for Customer Profiles (dashboard editing and public pages)

from pydantic import BaseModel, Field, validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from enum import Enum
import re

from config.themes import PROFESSION_THEMES, THEME_PRESETS


HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class CustomLink(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=500)


class PublicProfile(BaseModel):
    """Everything the public profile page and vCard export need."""
    full_name: str
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    tagline: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = None

    phone: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    location: Optional[str] = None

    linked_in: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    website: Optional[str] = None

    profession: Optional[str] = None
    theme_preset: Optional[str] = None
    accent_color: Optional[str] = None

    cta_text: Optional[str] = None
    cta_url: Optional[str] = None
    custom_links: List[CustomLink] = []

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_customer(cls, customer) -> "PublicProfile":
        profile = customer.profile
        return cls(
            full_name=profile.full_name,
            job_title=customer.job_title,
            company_name=customer.company,
            tagline=customer.tagline,
            bio=customer.bio,
            photo=profile.avatar_url,
            phone=profile.phone,
            email=profile.email,
            whatsapp=customer.whatsapp,
            location=customer.location,
            linked_in=customer.linkedin_url,
            instagram=customer.instagram_url,
            twitter=customer.twitter_url,
            facebook=customer.facebook_url,
            website=customer.website_url,
            profession=customer.profession,
            theme_preset=customer.theme_preset,
            accent_color=customer.accent_color,
            cta_text=customer.cta_text,
            cta_url=customer.cta_url,
            custom_links=customer.custom_links or [],
        )


class CustomerProfileUpdate(BaseModel):
    """PATCH body for /api/customer/profile; omitted fields are left alone."""
    full_name: Optional[str] = Field(None, min_length=2, max_length=255)
    phone: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=1000)
    tagline: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = None
    profession: Optional[str] = None
    theme_preset: Optional[str] = None
    accent_color: Optional[str] = None
    whatsapp: Optional[str] = None
    linkedin_url: Optional[str] = None
    instagram_url: Optional[str] = None
    facebook_url: Optional[str] = None
    twitter_url: Optional[str] = None
    website_url: Optional[str] = None
    cta_text: Optional[str] = Field(None, max_length=100)
    cta_url: Optional[str] = None
    custom_links: Optional[List[CustomLink]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @validator("profession")
    def validate_profession(cls, v):
        if v and v not in PROFESSION_THEMES:
            raise ValueError(f"Unknown profession: {v}")
        return v

    @validator("theme_preset")
    def validate_theme(cls, v):
        if v and v not in THEME_PRESETS:
            raise ValueError(f"Unknown theme preset: {v}")
        return v

    @validator("accent_color")
    def validate_accent(cls, v):
        if v and not HEX_COLOR.match(v):
            raise ValueError("Accent color must be a hex value like #8b5cf6")
        return v
