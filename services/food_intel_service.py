# services/food_intel_service.py
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends

import config
from models.dtos import (
    BarcodeInput, SearchInput, CategoryInput, BrandInput, EndpointCatalogEntry
)
from repositories.open_food_facts_repository import OpenFoodFactsRepository
from services.food_normalization_service import FoodNormalizationService, pick_int
from services import query_builder_service as queries

# overview에서 연결 확인용으로 조회하는 샘플 제품 (Nutella)
SAMPLE_BARCODE = "3017620422003"
FOUND_STATUS = 1
NOT_FOUND_MESSAGE = "Product not found"


def utc_now_iso() -> str:
    """응답 생성 시점의 UTC ISO-8601 문자열 (예: 2024-05-01T12:00:00.123Z)"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _as_mapping(data: Any) -> Mapping:
    return data if isinstance(data, Mapping) else {}


class FoodIntelService:
    """
    엔드포인트 핸들러 모음
    모든 핸들러는 업스트림 호출을 정확히 1번 수행 (재시도 없음)
    1. 쿼리 생성 (query_builder_service)
    2. 업스트림 조회 (OpenFoodFactsRepository)
    3. 정규화 (FoodNormalizationService)
    """
    def __init__(
        self,
        repo: OpenFoodFactsRepository = Depends(OpenFoodFactsRepository),
        normalizer: FoodNormalizationService = Depends(FoodNormalizationService)
    ):
        self.repo = repo
        self.normalizer = normalizer

    # -------------------------------------------------------------------
    # 무료: overview
    # -------------------------------------------------------------------
    def overview(self, catalog: List[EndpointCatalogEntry]) -> Dict[str, Any]:
        data = _as_mapping(self.repo.fetch(queries.product_path(SAMPLE_BARCODE)))
        sample = None
        if data.get("status") == FOUND_STATUS:
            sample = self.normalizer.normalize_summary(data.get("product"))

        return {
            "agent": config.AGENT_NAME,
            "description": "Food & nutrition intelligence powered by Open Food Facts",
            "dataSource": "Open Food Facts (live)",
            "sampleProduct": sample.model_dump(by_alias=True) if sample else None,
            "endpoints": [entry.model_dump(by_alias=True) for entry in catalog],
            "fetchedAt": utc_now_iso(),
        }

    # -------------------------------------------------------------------
    # 유료: 바코드 조회 / 상세 영양 분석
    # -------------------------------------------------------------------
    def lookup_barcode(self, request: BarcodeInput) -> Dict[str, Any]:
        data = _as_mapping(self.repo.fetch(queries.product_path(request.barcode)))
        if data.get("status") != FOUND_STATUS:
            return self._not_found(request.barcode)

        product = self.normalizer.normalize_summary(data.get("product"))
        return {
            "found": True,
            "product": product.model_dump(by_alias=True) if product else None,
            "fetchedAt": utc_now_iso(),
        }

    def nutrition(self, request: BarcodeInput) -> Dict[str, Any]:
        data = _as_mapping(self.repo.fetch(queries.product_path(request.barcode)))
        if data.get("status") != FOUND_STATUS:
            return self._not_found(request.barcode)

        detail = self.normalizer.normalize_detail(data.get("product"), request.barcode)
        return {
            "found": True,
            **detail.model_dump(by_alias=True),
            "fetchedAt": utc_now_iso(),
        }

    def _not_found(self, barcode: str) -> Dict[str, Any]:
        # not found는 에러가 아니라 정상 응답 (정규화도 하지 않음)
        return {"found": False, "barcode": barcode, "message": NOT_FOUND_MESSAGE}

    # -------------------------------------------------------------------
    # 유료: 목록형 (검색 / 카테고리 / 브랜드)
    # -------------------------------------------------------------------
    def search(self, request: SearchInput) -> Dict[str, Any]:
        # 개수 제한은 업스트림 page_size가 담당
        data = _as_mapping(self.repo.fetch(queries.search_path(request.query, request.limit)))
        return {
            "query": request.query,
            "count": pick_int(data, ("count",), 0),
            "products": self._normalize_list(data.get("products")),
            "fetchedAt": utc_now_iso(),
        }

    def category(self, request: CategoryInput) -> Dict[str, Any]:
        data = _as_mapping(self.repo.fetch(queries.category_path(request.category)))
        return {
            "category": request.category,
            "count": pick_int(data, ("count",), 0),
            "products": self._normalize_list(data.get("products"), request.limit),
            "fetchedAt": utc_now_iso(),
        }

    def brand(self, request: BrandInput) -> Dict[str, Any]:
        data = _as_mapping(self.repo.fetch(queries.brand_path(request.brand)))
        return {
            "brand": request.brand,
            "count": pick_int(data, ("count",), 0),
            "products": self._normalize_list(data.get("products"), request.limit),
            "fetchedAt": utc_now_iso(),
        }

    def _normalize_list(self, raw_products: Any, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        목록이 없으면 빈 리스트, limit이 있으면 정규화 전에 먼저 자름
        정규화 결과가 None인 항목은 빼고 반환
        """
        if not isinstance(raw_products, list):
            raw_products = []
        if limit is not None:
            raw_products = raw_products[:limit]

        products = []
        for raw in raw_products:
            product = self.normalizer.normalize_summary(raw)
            if product is not None:
                products.append(product.model_dump(by_alias=True))
        return products
