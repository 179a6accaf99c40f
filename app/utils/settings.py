# app/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

PRODUCT_API_URL = os.getenv("PRODUCT_API_URL", "http://localhost:3001")
PAGE_SIZE = int(os.getenv("PAGE_SIZE", 12))
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 5))
CART_STORAGE = os.getenv("CART_STORAGE", "file")  # file | redis | memory
CART_STORAGE_PATH = os.getenv("CART_STORAGE_PATH", ".cart.json")
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
