# FastAPI Server for the TapOnce NFC card platform

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from database.config import SessionLocal, init_db
from database.bootstrap import seed_admin, seed_card_designs
from routers import (
    agents_router,
    admin_agents_router,
    admin_payouts_router,
    admin_orders_router,
    admin_catalog_router,
    orders_router,
    agent_portal_router,
    auth_router,
    claim_account_router,
    customer_router,
    public_profile_router,
    drafts_router,
    notifications_router,
)

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="TapOnce API",
    description="NFC business cards sold direct and through an agent network",
    version="1.0.0"
)


@app.on_event("startup")
def startup_event():
    if os.getenv("SKIP_STARTUP_SEED", "").lower() in ("1", "true", "yes"):
        return

    init_db()

    db = SessionLocal()
    try:
        seed_admin(db)
        seed_card_designs(db)
        db.commit()
        logger.info("Database tables initialized and seeded")
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        db.rollback()
    finally:
        db.close()


# CORS Setup - Allow all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=False,  # Required when using "*"
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# ROUTERS
# ============================================================================
# JSON API under /api; public profile pages stay at /p/{slug} so card links are short
app.include_router(auth_router, prefix="/api")
app.include_router(claim_account_router, prefix="/api")
app.include_router(agents_router, prefix="/api")
app.include_router(orders_router, prefix="/api")
app.include_router(drafts_router, prefix="/api")
app.include_router(agent_portal_router, prefix="/api")
app.include_router(customer_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(admin_orders_router, prefix="/api")
app.include_router(admin_agents_router, prefix="/api")
app.include_router(admin_catalog_router, prefix="/api")
app.include_router(admin_payouts_router, prefix="/api")
app.include_router(public_profile_router)


@app.get("/")
def read_root():
    return {"message": "TapOnce API is running", "docs": "/docs"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
