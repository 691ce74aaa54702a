import os
from dotenv import load_dotenv

load_dotenv()

# Public URLs
APP_URL = os.getenv("APP_URL", "https://taponce.in").rstrip("/")

# Commission Rules (INR)
BASE_COMMISSION = int(os.getenv("BASE_COMMISSION", 100))
BONUS_RATE = float(os.getenv("BONUS_RATE", 0.5))  # Share of (sale - MSP) paid as bonus
OVERRIDE_RATE = float(os.getenv("OVERRIDE_RATE", 0.02))  # Sub-agent override, display only
OVERRIDE_AVG_CARD_PRICE = int(os.getenv("OVERRIDE_AVG_CARD_PRICE", 700))

# Catalog
DEFAULT_DESIGN_MSP = int(os.getenv("DEFAULT_DESIGN_MSP", 600))
FALLBACK_TEMPLATE_MSP = int(os.getenv("FALLBACK_TEMPLATE_MSP", 599))

# Orders
FIRST_ORDER_NUMBER = int(os.getenv("FIRST_ORDER_NUMBER", 1001))
ESTIMATED_DELIVERY_DAYS = int(os.getenv("ESTIMATED_DELIVERY_DAYS", 7))

# Accounts
MIN_PASSWORD_LENGTH = 8
GENERATED_PASSWORD_LENGTH = 12

# Auth
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-this-secret")
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))

# Seeded admin
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@taponce.in")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "changeme123")

# Email (Brevo)
BREVO_API_KEY = os.getenv("BREVO_API_KEY", "")
EMAIL_FROM_NAME = os.getenv("EMAIL_FROM_NAME", "TapOnce")
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "noreply@taponce.in")
