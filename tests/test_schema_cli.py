import pytest

from database.bootstrap import seed_card_designs
from database.models import CardDesign
from main import main


def test_schema_command_prints_postgres_ddl(capsys):
    main(["schema"])

    sql = capsys.readouterr().out
    assert "CREATE TYPE orderstatus AS ENUM ('pending_approval', 'approved'" in sql
    assert "CREATE TABLE orders" in sql
    assert "CREATE TABLE agent_msps" in sql
    assert "Vertical Blue Premium" in sql
    assert "ON CONFLICT DO NOTHING" in sql


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        main(["drop-everything"])


def test_seed_card_designs_is_idempotent(db_session):
    assert seed_card_designs(db_session) == 4
    db_session.commit()

    assert seed_card_designs(db_session) == 0
    assert db_session.query(CardDesign).count() == 4
