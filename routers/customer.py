# Customer Router for TapOnce
# Customers edit the details shown on their public profile page

import logging
import re

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth.decorators import require_customer
from config.app_config import APP_URL
from database.config import get_db
from database.models import Customer
from schemas.profiles import CustomerProfileUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customer", tags=["Customer"])

PROFILE_FIELDS = {"full_name", "phone"}
DIGIT_FIELDS = {"phone", "whatsapp"}


def profile_response(customer: Customer) -> dict:
    profile = customer.profile
    return {
        "profile": {
            "fullName": profile.full_name,
            "phone": profile.phone,
            "avatarUrl": profile.avatar_url,
            "email": profile.email,
        },
        "customer": {
            "id": customer.id,
            "slug": customer.slug,
            "profileUrl": f"{APP_URL}/p/{customer.slug}",
            "company": customer.company,
            "jobTitle": customer.job_title,
            "bio": customer.bio,
            "tagline": customer.tagline,
            "location": customer.location,
            "profession": customer.profession,
            "themePreset": customer.theme_preset,
            "accentColor": customer.accent_color,
            "whatsapp": customer.whatsapp,
            "linkedinUrl": customer.linkedin_url,
            "instagramUrl": customer.instagram_url,
            "facebookUrl": customer.facebook_url,
            "twitterUrl": customer.twitter_url,
            "websiteUrl": customer.website_url,
            "ctaText": customer.cta_text,
            "ctaUrl": customer.cta_url,
            "customLinks": customer.custom_links or [],
            "status": customer.status.value,
        },
    }


@router.get("/profile")
async def get_profile(customer: Customer = Depends(require_customer())):
    return profile_response(customer)


@router.patch("/profile")
async def update_profile(
    data: CustomerProfileUpdate,
    db: Session = Depends(get_db),
    customer: Customer = Depends(require_customer())
):
    """Update only the fields present in the request; blank strings clear a field."""
    changes = data.model_dump(exclude_unset=True)

    for field, value in changes.items():
        if isinstance(value, str):
            value = value.strip() or None
            if value and field in DIGIT_FIELDS:
                value = re.sub(r"\D", "", value)

        if field in PROFILE_FIELDS:
            if field == "full_name" and not value:
                continue
            setattr(customer.profile, field, value)
        else:
            setattr(customer, field, value)

    try:
        db.commit()
        db.refresh(customer)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update customer profile {customer.id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile")

    logger.info(f"Customer profile updated: {customer.id}")
    return {"success": True, "message": "Profile updated successfully", **profile_response(customer)}
