# services/config.py
import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ASSETS_DIR = os.path.join(BASE_DIR, "assets")


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


# -----------------------------------------
# Paths (override via environment)
# -----------------------------------------
# CERT_OUTPUT_PATH=/tmp/cert.pdf
OUTPUT_PATH = os.getenv("CERT_OUTPUT_PATH", "cert.pdf")
LOGO_PATH = os.getenv("CERT_LOGO_PATH", os.path.join(ASSETS_DIR, "logo.png"))
SIGNATURE_PATH = os.getenv("CERT_SIGNATURE_PATH", os.path.join(ASSETS_DIR, "sig.svg"))

# Layout grid overlay, only useful while tuning coordinates
DEBUG_GRID = _flag("CERT_DEBUG_GRID")

LOG_LEVEL = os.getenv("CERT_LOG_LEVEL", "INFO").strip().upper() or "INFO"
