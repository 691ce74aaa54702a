# Public Profile Router for TapOnce
# The page a card tap opens, plus the "Save Contact" vCard download

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from core.profile_theme import get_contact_actions, get_theme_for_profile
from core.vcard import generate_vcard, vcard_filename
from database.config import get_db
from database.models import Customer, CustomerStatus
from schemas.profiles import PublicProfile

router = APIRouter(prefix="/p", tags=["Public Profile"])


def _load_profile(db: Session, slug: str) -> PublicProfile:
    customer = db.query(Customer).filter(Customer.slug == slug).first()
    if not customer or customer.status == CustomerStatus.SUSPENDED:
        raise HTTPException(status_code=404, detail="Profile not found")
    return PublicProfile.from_customer(customer)


@router.get("/{slug}")
async def public_profile(slug: str, db: Session = Depends(get_db)):
    profile = _load_profile(db, slug)
    return {
        "slug": slug,
        "profile": profile.model_dump(by_alias=True),
        "theme": get_theme_for_profile(profile),
        "actions": get_contact_actions(profile),
    }


@router.get("/{slug}/vcard")
async def download_vcard(slug: str, db: Session = Depends(get_db)):
    profile = _load_profile(db, slug)
    return Response(
        content=generate_vcard(profile),
        media_type="text/vcard",
        headers={"Content-Disposition": f'attachment; filename="{vcard_filename(profile)}"'},
    )
