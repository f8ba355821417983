import os
from decimal import Decimal

# Database Configuration
# Uses default credentials for local Docker Compose setup
DB_URL = os.getenv("DATABASE_URL", "postgres://user:password@db:5432/pos_inventory_db")

# Application Metadata
PROJECT_NAME = "POS Inventory Service"
VERSION = "1.0.0"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Identity provider used to verify bearer tokens (GET {AUTH_URL}/user)
AUTH_URL = os.getenv("AUTH_URL", "http://auth:9999/auth/v1").rstrip("/")
AUTH_API_KEY = os.getenv("AUTH_API_KEY", "")
AUTH_TIMEOUT = float(os.getenv("AUTH_TIMEOUT", 5))

# Stock Decrementer behaviour
# When true, a failed recipe query is treated like "no recipe" and the ingredient-link fallback runs.
RECIPE_ERROR_FALLBACK = os.getenv("RECIPE_ERROR_FALLBACK", "true").lower() == "true"
# Share of the initial quantity at or below which an ingredient counts as low stock
LOW_STOCK_RATIO = Decimal(os.getenv("LOW_STOCK_RATIO", "0.3"))

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}
