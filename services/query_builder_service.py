# services/query_builder_service.py
import re
from urllib.parse import quote, urlencode

WHITESPACE_RUN = re.compile(r"\s+")


def slugify(value: str) -> str:
    """
    카테고리/브랜드 이름 -> OFF 슬러그
    "Coca Cola" -> "coca-cola", "  Mixed   Case  " -> "mixed-case"
    (공백만 처리, 아포스트로피/악센트 등은 그대로 둠)
    """
    return WHITESPACE_RUN.sub("-", value.strip().lower())


def product_path(barcode: str) -> str:
    return f"/api/v0/product/{quote(barcode, safe='')}.json"


def search_path(query: str, limit: int) -> str:
    # 검색은 업스트림 page_size로 개수를 제한함 (로컬 자르기 없음)
    params = urlencode({
        "search_terms": query,
        "json": "1",
        "page_size": str(limit),
    })
    return f"/cgi/search.pl?{params}"


def category_path(category: str) -> str:
    return f"/category/{quote(slugify(category), safe='')}.json"


def brand_path(brand: str) -> str:
    return f"/brand/{quote(slugify(brand), safe='')}.json"
