# config.py
import os
from dotenv import load_dotenv

# --- .env 파일 로드 ---
load_dotenv()

# =========================================================
# Open Food Facts (업스트림)
# =========================================================
OFF_BASE_URL = os.getenv("OFF_BASE_URL", "https://world.openfoodfacts.org")
OFF_USER_AGENT = os.getenv("OFF_USER_AGENT", "food-intel-agent/1.0")
# 업스트림 호출 1회당 최대 대기 시간 (초)
OFF_TIMEOUT_SECONDS = float(os.getenv("OFF_TIMEOUT_SECONDS", "10"))

# =========================================================
# 서비스 메타데이터
# =========================================================
AGENT_NAME = "food-intel"
AGENT_VERSION = "1.0.0"
AGENT_DESCRIPTION = (
    "Food & nutrition intelligence - barcode lookup, product search, "
    "nutritional data via Open Food Facts"
)
DEFAULT_PUBLIC_URL = "https://food-intel-production.up.railway.app"
RAILWAY_PUBLIC_DOMAIN = os.getenv("RAILWAY_PUBLIC_DOMAIN")
ICON_PATH = os.getenv("ICON_PATH", "./icon.png")

# =========================================================
# 서버 / 로깅
# =========================================================
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]


def public_base_url() -> str:
    """배포 도메인이 있으면 그걸 쓰고, 없으면 기본 운영 주소"""
    if RAILWAY_PUBLIC_DOMAIN:
        return f"https://{RAILWAY_PUBLIC_DOMAIN}"
    return DEFAULT_PUBLIC_URL
