# Database bootstrap: schema SQL export and seed data

import logging
from typing import List

from sqlalchemy import Enum
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.orm import Session
from sqlalchemy.schema import CreateIndex, CreateTable

from auth.utils import get_password_hash
from config.app_config import ADMIN_EMAIL, ADMIN_PASSWORD
from database.models import Base, CardDesign, DesignStatus, Profile, UserRole, generate_uuid

logger = logging.getLogger(__name__)

SEED_CARD_DESIGNS = [
    {
        "name": "Vertical Blue Premium",
        "description": "Professional vertical design with blue gradient",
        "base_msp": 600,
        "preview_url": "/assets/images/cards/vertical-blue.png",
    },
    {
        "name": "Horizontal Gold Elite",
        "description": "Elegant horizontal card with gold accents",
        "base_msp": 800,
        "preview_url": "/assets/images/cards/horizontal-gold.png",
    },
    {
        "name": "Minimal White Classic",
        "description": "Clean minimalist design in white",
        "base_msp": 500,
        "preview_url": "/assets/images/cards/minimal-white.png",
    },
    {
        "name": "Dark Mode Professional",
        "description": "Modern dark theme for tech professionals",
        "base_msp": 700,
        "preview_url": "/assets/images/cards/dark-mode.png",
    },
]


# ============================================================================
# SCHEMA SQL
# ============================================================================

def _enum_types() -> List[Enum]:
    seen = {}
    for table in Base.metadata.sorted_tables:
        for column in table.columns:
            if isinstance(column.type, Enum) and column.type.name not in seen:
                seen[column.type.name] = column.type
    return list(seen.values())


def render_schema_sql() -> str:
    """PostgreSQL DDL for every table plus the seed card designs."""
    dialect = postgresql.dialect()
    statements = ["-- TapOnce database schema", ""]

    for enum_type in _enum_types():
        values = ", ".join(f"'{v}'" for v in enum_type.enums)
        statements.append(f"CREATE TYPE {enum_type.name} AS ENUM ({values});")
    statements.append("")

    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table).compile(dialect=dialect)).strip() + ";")
        for index in sorted(table.indexes, key=lambda i: i.name):
            statements.append(str(CreateIndex(index).compile(dialect=dialect)).strip() + ";")
        statements.append("")

    statements.append("-- Seed card designs")
    for design in SEED_CARD_DESIGNS:
        stmt = pg_insert(CardDesign.__table__).values(
            id=generate_uuid(),
            status=DesignStatus.ACTIVE,
            total_sales=0,
            **design
        ).on_conflict_do_nothing()
        statements.append(str(stmt.compile(dialect=dialect, compile_kwargs={"literal_binds": True})) + ";")

    return "\n".join(statements) + "\n"


# ============================================================================
# SEED DATA
# ============================================================================

def seed_admin(db: Session, email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD) -> Profile:
    admin = db.query(Profile).filter(Profile.email == email).first()
    if admin:
        return admin

    logger.info(f"Seeding admin user: {email}")
    admin = Profile(
        email=email,
        password_hash=get_password_hash(password),
        role=UserRole.ADMIN,
        full_name="TapOnce Admin",
    )
    db.add(admin)
    db.flush()
    return admin


def seed_card_designs(db: Session) -> int:
    """Insert the starter designs that are missing by name; returns how many were added."""
    existing = {name for (name,) in db.query(CardDesign.name).all()}
    added = 0
    for design in SEED_CARD_DESIGNS:
        if design["name"] in existing:
            continue
        db.add(CardDesign(status=DesignStatus.ACTIVE, total_sales=0, **design))
        added += 1
    if added:
        db.flush()
        logger.info(f"Seeded {added} card designs")
    return added
