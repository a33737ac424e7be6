# routers/entrypoint_router.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, ValidationError

from services.endpoint_registry import ENDPOINT_REGISTRY, EndpointNotFoundError, invoke
from services.food_intel_service import FoodIntelService

router = APIRouter(
    prefix="/entrypoints",
    tags=["Entrypoints"]
)


class InvokeRequest(BaseModel):
    """POST /entrypoints/{key}/invoke 요청 본문"""
    input: Dict[str, Any] = Field(default_factory=dict)


# -------------------------------------------------------------------
# 엔드포인트 목록 (가격 + 입력 스키마)
# -------------------------------------------------------------------
@router.get("", summary="엔드포인트 목록")
def list_entrypoints() -> List[Dict[str, Any]]:
    return [
        {
            "key": spec.key,
            "description": spec.description,
            "price": spec.display_price,
            "priceAmount": spec.price,
            "inputSchema": spec.input_model.model_json_schema(),
        }
        for spec in ENDPOINT_REGISTRY.values()
    ]


# -------------------------------------------------------------------
# 엔드포인트 실행
#  - 결제 승인은 앞단(결제 게이트)에서 끝났다고 가정
#  - 입력 검증 실패는 422 (업스트림 호출 전)
#  - 업스트림 실패(UpstreamError)는 main.py 핸들러가 502로 변환
# -------------------------------------------------------------------
@router.post("/{key}/invoke", summary="엔드포인트 실행")
def invoke_entrypoint(
    key: str,
    request: Optional[InvokeRequest] = None,
    service: FoodIntelService = Depends(FoodIntelService)
):
    try:
        # 본문 없이 호출하면 입력 {} (overview용)
        return invoke(key, request.input if request else {}, service)
    except EndpointNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))
