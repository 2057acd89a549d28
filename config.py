# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

class Config:
    # PDF export storage
    EXPORTS_DIR = os.getenv("EXPORTS_DIR", (BASE_DIR / "exports").as_posix())

    # Used when an invoice document does not carry its own currency code.
    DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD").strip().upper() or "USD"

    # Catalog id, e.g. modern-ocean-blue, classic-forest-green, strip-crimson-red
    DEFAULT_TEMPLATE_ID = os.getenv("DEFAULT_TEMPLATE_ID", "modern-ocean-blue")

    # Set to 0 to keep page streams readable (handy when diffing output)
    PDF_PAGE_COMPRESSION = os.getenv("PDF_PAGE_COMPRESSION", "1") == "1"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
