# Funnel Drafts Router for TapOnce
# Persists the design studio state between funnel steps

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.draft_order import DraftNotFound, DraftOrderError, clear_draft, get_draft, open_draft, to_order_prefill, update_draft
from database.config import get_db
from schemas.orders import DraftCreate, DraftResponse, DraftUpdate

router = APIRouter(prefix="/drafts", tags=["Drafts"])


def _response(draft) -> dict:
    data = DraftResponse.model_validate(draft).model_dump(by_alias=True)
    data["prefill"] = to_order_prefill(draft)
    return data


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_draft(data: DraftCreate, db: Session = Depends(get_db)):
    try:
        draft = open_draft(db, data.profession, user_name=data.user_name, user_email=data.user_email)
    except DraftOrderError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    db.commit()
    db.refresh(draft)
    return _response(draft)


@router.get("/{draft_id}")
async def read_draft(draft_id: str, db: Session = Depends(get_db)):
    try:
        draft = get_draft(db, draft_id)
    except DraftNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _response(draft)


@router.patch("/{draft_id}")
async def patch_draft(draft_id: str, data: DraftUpdate, db: Session = Depends(get_db)):
    try:
        draft = update_draft(
            db,
            draft_id,
            template_id=data.template_id,
            material=data.material.value if data.material else None,
            personalization=data.personalization,
            user_name=data.user_name,
            user_email=data.user_email,
        )
    except DraftNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DraftOrderError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    db.commit()
    db.refresh(draft)
    return _response(draft)


@router.delete("/{draft_id}")
async def delete_draft(draft_id: str, db: Session = Depends(get_db)):
    if not clear_draft(db, draft_id):
        raise HTTPException(status_code=404, detail=f"Draft {draft_id} not found")
    db.commit()
    return {"success": True}
