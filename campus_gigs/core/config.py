import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./campus_gigs.db")
SEED_DEFAULT_PLANS = os.getenv("SEED_DEFAULT_PLANS", "1") == "1"

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ✅ PayChangu
PAYCHANGU_SECRET_KEY = os.getenv("PAYCHANGU_SECRET_KEY") or os.getenv("PAY_CHANGU_SECRET_KEY")
PAYCHANGU_API_URL = os.getenv("PAYCHANGU_API_URL", "https://api.paychangu.com")
PAYCHANGU_CURRENCY = os.getenv("PAYCHANGU_CURRENCY", "MWK")
PAYCHANGU_TIMEOUT_SECONDS = float(os.getenv("PAYCHANGU_TIMEOUT_SECONDS", "20"))

# ✅ Callback / return URLs
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000")
APP_LOGO_URL = os.getenv("APP_LOGO_URL", "")
NOOP_CALLBACK_URL = os.getenv("NOOP_CALLBACK_URL")

ESCROW_CALLBACK_URL = (
    os.getenv("ESCROW_CALLBACK_URL")
    or NOOP_CALLBACK_URL
    or f"{APP_BASE_URL}/escrow/noop"
)
ESCROW_RETURN_URL = os.getenv("ESCROW_RETURN_URL") or os.getenv("ESCROW_FALLBACK_URL")

SUBSCRIPTION_CALLBACK_URL = (
    os.getenv("SUBSCRIPTION_CALLBACK_URL")
    or NOOP_CALLBACK_URL
    or f"{APP_BASE_URL}/subscriptions/webhook"
)
SUBSCRIPTION_RETURN_URL = os.getenv("SUBSCRIPTION_RETURN_URL")

# ✅ HTTP
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5000").split(",")
    if origin.strip()
]

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
