# services/endpoint_registry.py
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel

from models.dtos import (
    OverviewInput, BarcodeInput, SearchInput, CategoryInput, BrandInput,
    EndpointCatalogEntry
)
from services.food_intel_service import FoodIntelService

# 가격 단위: USDC 최소 단위 (6자리) -> 1000 = $0.001
PRICE_DECIMALS = 6


class EndpointNotFoundError(Exception):
    """등록되지 않은 엔드포인트 키"""
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown entrypoint: {key}")


@dataclass(frozen=True)
class EndpointSpec:
    key: str
    description: str
    input_model: Type[BaseModel]
    price: int
    handler: Callable[[FoodIntelService, BaseModel], Dict[str, Any]]

    @property
    def display_price(self) -> str:
        return format_price(self.price)


def format_price(amount: int) -> str:
    """1000 -> "$0.001", 0 -> "$0" """
    return f"${amount / 10 ** PRICE_DECIMALS:g}"


def _call(method_name: str):
    """서비스 메서드 이름 -> handler(service, request)"""
    def handler(service: FoodIntelService, request: BaseModel) -> Dict[str, Any]:
        return getattr(service, method_name)(request)
    handler.__name__ = method_name
    return handler


def _overview(service: FoodIntelService, _request: OverviewInput) -> Dict[str, Any]:
    # 카탈로그는 레지스트리에서 생성 (가격/설명 중복 관리 X)
    return service.overview(build_catalog(exclude=("overview",)))


_ENDPOINTS = (
    EndpointSpec(
        key="overview",
        description="Free overview of food-intel capabilities - try before you buy",
        input_model=OverviewInput,
        price=0,
        handler=_overview,
    ),
    EndpointSpec(
        key="barcode",
        description="Look up a food product by barcode (EAN/UPC)",
        input_model=BarcodeInput,
        price=1000,
        handler=_call("lookup_barcode"),
    ),
    EndpointSpec(
        key="search",
        description="Search products by name or keyword",
        input_model=SearchInput,
        price=2000,
        handler=_call("search"),
    ),
    EndpointSpec(
        key="category",
        description="Get products in a food category",
        input_model=CategoryInput,
        price=2000,
        handler=_call("category"),
    ),
    EndpointSpec(
        key="brand",
        description="Get products from a specific brand",
        input_model=BrandInput,
        price=2000,
        handler=_call("brand"),
    ),
    EndpointSpec(
        key="nutrition",
        description="Detailed nutrition analysis for a product with health scores",
        input_model=BarcodeInput,
        price=3000,
        handler=_call("nutrition"),
    ),
)

# 시작 시 한 번 만들고 이후 읽기 전용
ENDPOINT_REGISTRY: Mapping[str, EndpointSpec] = MappingProxyType(
    {spec.key: spec for spec in _ENDPOINTS}
)


def get_endpoint(key: str) -> EndpointSpec:
    try:
        return ENDPOINT_REGISTRY[key]
    except KeyError:
        raise EndpointNotFoundError(key) from None


def build_catalog(exclude=()) -> List[EndpointCatalogEntry]:
    return [
        EndpointCatalogEntry(
            key=spec.key,
            price=spec.display_price,
            price_amount=spec.price,
            description=spec.description,
        )
        for spec in ENDPOINT_REGISTRY.values()
        if spec.key not in exclude
    ]


def invoke(key: str, payload: Optional[Mapping[str, Any]], service: FoodIntelService) -> Dict[str, Any]:
    """
    1. 키로 엔드포인트 조회 (없으면 EndpointNotFoundError)
    2. 입력 검증 (실패하면 pydantic ValidationError, 업스트림 호출 전)
    3. 핸들러 실행 -> {"output": ...} 형태로 반환
    """
    spec = get_endpoint(key)
    request = spec.input_model.model_validate(payload or {})
    return {"output": spec.handler(service, request)}

