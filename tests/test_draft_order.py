import pytest

from core.draft_order import DraftNotFound, DraftOrderError, clear_draft, get_draft, open_draft, to_order_prefill, update_draft


def test_draft_lifecycle(db_session):
    draft = open_draft(db_session, "doctor", user_name=" Anita Rao ", user_email="Anita@Example.com")
    db_session.commit()

    update_draft(db_session, draft.id, template_id="classic", material="metal", personalization={"name": "Anita Rao"})
    update_draft(db_session, draft.id, personalization={"title": "Cardiologist"})
    db_session.commit()

    draft = get_draft(db_session, draft.id)
    assert draft.user_email == "anita@example.com"
    assert draft.personalization == {"name": "Anita Rao", "title": "Cardiologist"}

    prefill = to_order_prefill(draft)
    assert prefill["customerName"] == "Anita Rao"
    assert prefill["line1Text"] == "ANITA RAO"
    assert prefill["line2Text"] == "Cardiologist"
    assert prefill["materialName"] == "Matte Black Metal"
    assert prefill["price"] == 999

    assert clear_draft(db_session, draft.id) is True
    assert clear_draft(db_session, draft.id) is False
    with pytest.raises(DraftNotFound):
        get_draft(db_session, draft.id)


def test_unknown_profession_and_material_are_rejected(db_session):
    with pytest.raises(DraftOrderError):
        open_draft(db_session, "astronaut")

    draft = open_draft(db_session, "student")
    with pytest.raises(DraftOrderError):
        update_draft(db_session, draft.id, material="gold")
