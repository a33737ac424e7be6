# services/food_normalization_service.py
import math
import re
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

from models.dtos import (
    Product, NutritionPer100g, NutritionDetail, ExtendedNutritionPer100g,
    NutritionPerServing, HealthScores, NutriscoreInfo, NovaInfo,
    EcoscoreInfo, IngredientsInfo, Number
)

# 알레르기 태그 앞의 언어 접두어 ("en:milk" -> "milk")
LOCALE_PREFIX = re.compile(r"^[a-z]{2}:")
NUTRISCORE_GRADES = {"a", "b", "c", "d", "e"}
# Eco-Score(Green-Score)는 a-plus, f 등급도 있음
ECOSCORE_GRADES = {"a-plus", "a", "b", "c", "d", "e", "f"}

# (출력 필드명, nutriments 키) - 요약 9종
SUMMARY_NUTRIENTS = (
    ("energy_kcal", "energy-kcal_100g"),
    ("fat", "fat_100g"),
    ("saturated_fat", "saturated-fat_100g"),
    ("carbohydrates", "carbohydrates_100g"),
    ("sugars", "sugars_100g"),
    ("fiber", "fiber_100g"),
    ("proteins", "proteins_100g"),
    ("salt", "salt_100g"),
    ("sodium", "sodium_100g"),
)

# 상세 14종 = 요약 9종 + 5종
DETAIL_NUTRIENTS = (("energy_kj", "energy_100g"),) + SUMMARY_NUTRIENTS + (
    ("calcium", "calcium_100g"),
    ("iron", "iron_100g"),
    ("vitamin_a", "vitamin-a_100g"),
    ("vitamin_c", "vitamin-c_100g"),
)

SERVING_NUTRIENTS = (
    ("energy_kcal", "energy-kcal_serving"),
    ("fat", "fat_serving"),
    ("carbohydrates", "carbohydrates_serving"),
    ("sugars", "sugars_serving"),
    ("proteins", "proteins_serving"),
    ("salt", "salt_serving"),
)

# ===================================================================
# 필드 추출 헬퍼
#  - candidates 순서대로 보고, '있고 + 값이 있고 + 타입이 맞는' 첫 값을 사용
#  - 하나도 없으면 default
#  - 타입이 틀린 값은 예외 없이 건너뜀
# ===================================================================
def _candidates(raw: Any, names: Sequence[str]):
    if not isinstance(raw, Mapping):
        return
    for name in names:
        yield raw.get(name)


def _as_number(value: Any) -> Optional[Number]:
    # bool은 int의 하위 타입이라 먼저 걸러냄
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def pick_str(raw: Any, names: Sequence[str], default: Optional[str] = "") -> Optional[str]:
    for value in _candidates(raw, names):
        if not value or isinstance(value, bool):
            continue
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)):
            return str(value)
    return default


def pick_number(
    raw: Any, names: Sequence[str], default: Optional[Number] = None, keep_zero: bool = True
) -> Optional[Number]:
    # 영양성분 / 개수는 0도 유효한 값, 점수 필드는 keep_zero=False (0 -> 없음)
    for value in _candidates(raw, names):
        number = _as_number(value)
        if number is None or (number == 0 and not keep_zero):
            continue
        return number
    return default


def pick_int(
    raw: Any, names: Sequence[str], default: Optional[int] = None, keep_zero: bool = True
) -> Optional[int]:
    # 소수 값(3.7, "2.9")은 자르지 않고 '없음'으로 취급
    for value in _candidates(raw, names):
        number = _as_number(value)
        if number is None or number != int(number):
            continue
        if number == 0 and not keep_zero:
            continue
        return int(number)
    return default


def pick_score(raw: Any, names: Sequence[str]) -> Optional[Number]:
    """nutriscore_score / ecoscore_score: 값이 없거나 0이면 None"""
    return pick_number(raw, names, keep_zero=False)


def pick_grade(raw: Any, names: Sequence[str], allowed: set) -> Optional[str]:
    grade = pick_str(raw, names, default=None)
    if grade is None:
        return None
    grade = grade.strip().lower()
    return grade if grade in allowed else None


def strip_locale_prefix(tag: str) -> str:
    return LOCALE_PREFIX.sub("", tag, count=1)


class FoodNormalizationService:
    """
    [역할] Open Food Facts 원본 제품 JSON -> 고정 스키마(Product / NutritionDetail)
    같은 입력이면 항상 같은 출력 (시간, 로그, 상태 없음)
    """

    def normalize_summary(self, raw: Any) -> Optional[Product]:
        """원본 제품 1건 -> Product (원본이 없으면 None)"""
        if not isinstance(raw, Mapping):
            return None

        return Product(
            code=pick_str(raw, ("code", "_id")),
            name=pick_str(raw, ("product_name",), "Unknown"),
            brand=pick_str(raw, ("brands",), "Unknown"),
            categories=pick_str(raw, ("categories",)),
            nutriscore=pick_grade(raw, ("nutriscore_grade",), NUTRISCORE_GRADES),
            nova_group=pick_int(raw, ("nova_group",), keep_zero=False),
            ecoscore=pick_grade(raw, ("ecoscore_grade",), ECOSCORE_GRADES),
            ingredients=pick_str(raw, ("ingredients_text",)),
            allergens=pick_str(raw, ("allergens",)),
            image_url=pick_str(raw, ("image_url",), None),
            nutrition_per_100g=self._nutrients(raw, NutritionPer100g, SUMMARY_NUTRIENTS),
        )

    def normalize_detail(self, raw: Any, barcode: str) -> NutritionDetail:
        """
        '찾은 제품'(status == 1)의 원본 -> NutritionDetail
        1회 제공량 블록은 영양 정보 + serving_size 문자열이 둘 다 있을 때만 생성
        """
        if not isinstance(raw, Mapping):
            raw = {}
        serving_size = pick_str(raw, ("serving_size",), None)

        per_serving = None
        if serving_size:
            per_serving = self._nutrients(raw, NutritionPerServing, SERVING_NUTRIENTS)

        return NutritionDetail(
            barcode=barcode,
            name=pick_str(raw, ("product_name",), "Unknown"),
            brand=pick_str(raw, ("brands",), "Unknown"),
            serving_size=serving_size,
            health_scores=HealthScores(
                nutriscore=NutriscoreInfo(
                    grade=pick_grade(raw, ("nutriscore_grade",), NUTRISCORE_GRADES),
                    score=pick_score(raw, ("nutriscore_score",)),
                ),
                nova=NovaInfo(
                    group=pick_int(raw, ("nova_group",), keep_zero=False),
                    group_name=pick_str(raw, ("nova_groups",), None),
                ),
                ecoscore=EcoscoreInfo(
                    grade=pick_grade(raw, ("ecoscore_grade",), ECOSCORE_GRADES),
                    score=pick_score(raw, ("ecoscore_score",)),
                ),
            ),
            nutrition_per_100g=self._nutrients(raw, ExtendedNutritionPer100g, DETAIL_NUTRIENTS),
            nutrition_per_serving=per_serving,
            ingredients=IngredientsInfo(
                text=pick_str(raw, ("ingredients_text",)),
                count=pick_int(raw, ("ingredients_n",), 0),
                from_palm_oil=pick_int(raw, ("ingredients_from_palm_oil_n",), 0),
            ),
            allergens=self.normalize_allergens(raw.get("allergens_tags")),
            labels=pick_str(raw, ("labels",)),
            packaging=pick_str(raw, ("packaging",)),
            origins=pick_str(raw, ("origins",)),
        )

    def normalize_allergens(self, tags: Any) -> List[str]:
        """["en:milk", "en:nuts"] -> ["milk", "nuts"] (접두어 없는 값은 그대로)"""
        if not isinstance(tags, (list, tuple)):
            return []
        return [strip_locale_prefix(tag) for tag in tags if isinstance(tag, str)]

    def _nutrients(self, raw: Mapping, model, fields):
        """nutriments 블록이 없으면 None, 있으면 항목별로 따로 읽음"""
        nutriments = raw.get("nutriments")
        if not isinstance(nutriments, Mapping):
            return None
        return model(**{name: pick_number(nutriments, (key,)) for name, key in fields})
