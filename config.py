import os

from dotenv import load_dotenv

load_dotenv()

# Store API
STORE_API_URL = os.getenv("STORE_API_URL", "http://localhost:5000/api").rstrip("/")
STORE_API_TIMEOUT = float(os.getenv("STORE_API_TIMEOUT", "10"))

# Session
SESSION_SECRET = os.getenv("SESSION_SECRET", "devsecret_change_me")
SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", "24"))

# Console
STORE_NAME = os.getenv("STORE_NAME", "Atlas Arrow")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEFAULT_CARRIER = os.getenv("DEFAULT_CARRIER", "Atlas Express")

# Form rules
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "20"))
DASHBOARD_LOW_STOCK = int(os.getenv("DASHBOARD_LOW_STOCK", "10"))
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))
MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", "6"))
