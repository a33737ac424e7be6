# models/dtos.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Union

# ===================================================================
# 0. 공통 설정
# ===================================================================
# 응답 JSON은 camelCase (imageUrl, novaGroup ...)
# 파이썬 쪽 필드명은 snake_case 그대로 사용
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# 업스트림 숫자 그대로 (539 -> 539, 0.5 -> 0.5)
Number = Union[int, float]

# ===================================================================
# 1. [입력] 엔드포인트별 입력 스키마
# ===================================================================
class OverviewInput(BaseModel):
    """무료 overview - 입력 없음"""
    model_config = ConfigDict(extra='ignore')


class BarcodeInput(BaseModel):
    # "   " 같은 공백만 있는 바코드는 빈 값으로 보고 거절
    model_config = ConfigDict(str_strip_whitespace=True)

    barcode: str = Field(..., min_length=1, description="Product barcode (EAN-13, UPC-A, etc.)")


class SearchInput(BaseModel):
    query: str = Field(..., description="Search term (product name, ingredient, etc.)")
    limit: int = Field(10, ge=1, le=50)


class CategoryInput(BaseModel):
    category: str = Field(..., description='Category slug (e.g., "chocolates", "beverages", "cereals")')
    limit: int = Field(10, ge=1, le=50)


class BrandInput(BaseModel):
    brand: str = Field(..., description='Brand name (e.g., "Coca-Cola", "Nestle", "Kelloggs")')
    limit: int = Field(10, ge=1, le=50)

# ===================================================================
# 2. [출력] 요약 제품 (barcode / search / category / brand)
# ===================================================================
class NutritionPer100g(BaseModel):
    """100g 기준 영양성분 9종 (각 항목 개별적으로 null 가능)"""
    model_config = CAMEL_CONFIG

    energy_kcal: Optional[Number] = Field(None, alias="energy_kcal")
    fat: Optional[Number] = None
    saturated_fat: Optional[Number] = None
    carbohydrates: Optional[Number] = None
    sugars: Optional[Number] = None
    fiber: Optional[Number] = None
    proteins: Optional[Number] = None
    salt: Optional[Number] = None
    sodium: Optional[Number] = None


class Product(BaseModel):
    """업스트림 원본 레코드를 정규화한 제품 요약"""
    model_config = CAMEL_CONFIG

    code: str = ""
    name: str = "Unknown"
    brand: str = "Unknown"
    categories: str = ""
    nutriscore: Optional[str] = None
    nova_group: Optional[int] = None
    ecoscore: Optional[str] = None
    ingredients: str = ""
    allergens: str = ""
    image_url: Optional[str] = None
    # 영양 정보가 아예 없으면 블록 전체가 null
    nutrition_per_100g: Optional[NutritionPer100g] = Field(None, alias="nutritionPer100g")

# ===================================================================
# 3. [출력] 상세 영양 분석 (nutrition 엔드포인트 전용)
# ===================================================================
class NutriscoreInfo(BaseModel):
    grade: Optional[str] = None
    score: Optional[Number] = None


class NovaInfo(BaseModel):
    model_config = CAMEL_CONFIG

    group: Optional[int] = None
    group_name: Optional[str] = None


class EcoscoreInfo(BaseModel):
    grade: Optional[str] = None
    score: Optional[Number] = None


class HealthScores(BaseModel):
    nutriscore: NutriscoreInfo
    nova: NovaInfo
    ecoscore: EcoscoreInfo


class ExtendedNutritionPer100g(NutritionPer100g):
    """100g 기준 14종 (요약 9종 + 에너지(kJ), 칼슘, 철, 비타민 A/C)"""
    energy_kj: Optional[Number] = Field(None, alias="energy_kj")
    calcium: Optional[Number] = None
    iron: Optional[Number] = None
    vitamin_a: Optional[Number] = None
    vitamin_c: Optional[Number] = None


class NutritionPerServing(BaseModel):
    """1회 제공량 기준 6종"""
    model_config = CAMEL_CONFIG

    energy_kcal: Optional[Number] = Field(None, alias="energy_kcal")
    fat: Optional[Number] = None
    carbohydrates: Optional[Number] = None
    sugars: Optional[Number] = None
    proteins: Optional[Number] = None
    salt: Optional[Number] = None


class IngredientsInfo(BaseModel):
    model_config = CAMEL_CONFIG

    text: str = ""
    count: int = 0
    from_palm_oil: int = 0


class NutritionDetail(BaseModel):
    """
    [nutrition 응답 본문]
    '찾은 제품'에 대해서만 생성됨 (not found 처리는 호출하는 쪽 책임)
    """
    model_config = CAMEL_CONFIG

    barcode: str
    name: str = "Unknown"
    brand: str = "Unknown"
    serving_size: Optional[str] = None
    health_scores: HealthScores
    nutrition_per_100g: Optional[ExtendedNutritionPer100g] = Field(None, alias="nutritionPer100g")
    nutrition_per_serving: Optional[NutritionPerServing] = None
    ingredients: IngredientsInfo
    allergens: List[str] = Field(default_factory=list)
    labels: str = ""
    packaging: str = ""
    origins: str = ""

# ===================================================================
# 4. [카탈로그] 엔드포인트 목록 (overview / agent card)
# ===================================================================
class EndpointCatalogEntry(BaseModel):
    model_config = CAMEL_CONFIG

    key: str
    price: str              # 표시용 (예: "$0.001")
    price_amount: int       # 최소 단위 (USDC 6자리, 1000 = $0.001)
    description: str
