# Funnel draft order lifecycle
#
# A draft is opened when a visitor picks a profession, filled in by the
# design studio (template, material, personalization) and deleted once the
# checkout turns it into a real order.

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from config.themes import MATERIALS, MATERIAL_PRICES, PROFESSION_THEMES
from database.models import DraftOrder

logger = logging.getLogger(__name__)


class DraftOrderError(Exception):
    pass


class DraftNotFound(DraftOrderError):
    def __init__(self, draft_id: str):
        super().__init__(f"Draft {draft_id} not found")


def open_draft(db: Session, profession: str, user_name: Optional[str] = None, user_email: Optional[str] = None) -> DraftOrder:
    if profession not in PROFESSION_THEMES:
        raise DraftOrderError(f"Unknown profession: {profession}")

    draft = DraftOrder(
        profession=profession,
        user_name=user_name.strip() if user_name else None,
        user_email=user_email.strip().lower() if user_email else None,
        personalization={},
    )
    db.add(draft)
    db.flush()
    logger.info(f"Opened draft {draft.id} for profession '{profession}'")
    return draft


def get_draft(db: Session, draft_id: str) -> DraftOrder:
    draft = db.query(DraftOrder).filter(DraftOrder.id == draft_id).first()
    if not draft:
        raise DraftNotFound(draft_id)
    return draft


def update_draft(
    db: Session,
    draft_id: str,
    template_id: Optional[str] = None,
    material: Optional[str] = None,
    personalization: Optional[dict] = None,
    user_name: Optional[str] = None,
    user_email: Optional[str] = None,
) -> DraftOrder:
    draft = get_draft(db, draft_id)

    if material is not None:
        if material not in MATERIALS:
            raise DraftOrderError(f"Unknown material: {material}")
        draft.material = material
    if template_id is not None:
        draft.template_id = template_id
    if personalization is not None:
        # Reassign so the JSON column is flagged dirty
        draft.personalization = {**(draft.personalization or {}), **personalization}
    if user_name is not None:
        draft.user_name = user_name.strip()
    if user_email is not None:
        draft.user_email = user_email.strip().lower()

    draft.updated_at = datetime.utcnow()
    return draft


def clear_draft(db: Session, draft_id: str) -> bool:
    """Delete the draft; returns False when it was already gone."""
    deleted = db.query(DraftOrder).filter(DraftOrder.id == draft_id).delete()
    if deleted:
        logger.info(f"Cleared draft {draft_id}")
    return bool(deleted)


def to_order_prefill(draft: DraftOrder) -> dict:
    """Checkout defaults derived from what the visitor entered in the studio."""
    personalization = draft.personalization or {}
    name = personalization.get("name") or draft.user_name or ""
    return {
        "customerName": draft.user_name or name,
        "customerEmail": draft.user_email,
        "templateId": draft.template_id,
        "templateName": personalization.get("templateName"),
        "material": draft.material,
        "materialName": MATERIALS.get(draft.material) if draft.material else None,
        "price": MATERIAL_PRICES.get(draft.material) if draft.material else None,
        "line1Text": name.upper() if name else None,
        "line2Text": personalization.get("title"),
        "logoUrl": personalization.get("logoUrl"),
    }
