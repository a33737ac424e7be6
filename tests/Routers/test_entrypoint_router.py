import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from main import app
from repositories.open_food_facts_repository import OpenFoodFactsRepository, UpstreamError
from services.food_intel_service import FoodIntelService
from services.food_normalization_service import FoodNormalizationService


# -------------------------------------------------------------------
# 테스트 설정: 업스트림 저장소만 Mock으로 바꾸고 나머지는 실제 코드 사용
# -------------------------------------------------------------------
@pytest.fixture
def mock_repo() -> MagicMock:
    return MagicMock(spec=OpenFoodFactsRepository)


@pytest.fixture
def client(mock_repo: MagicMock):
    app.dependency_overrides[FoodIntelService] = lambda: FoodIntelService(
        repo=mock_repo, normalizer=FoodNormalizationService()
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_list_entrypoints(client):
    response = client.get("/entrypoints")

    assert response.status_code == 200
    entries = {e["key"]: e for e in response.json()}
    assert set(entries) == {"overview", "barcode", "search", "category", "brand", "nutrition"}
    assert entries["nutrition"]["priceAmount"] == 3000
    assert entries["nutrition"]["price"] == "$0.003"
    assert "barcode" in entries["barcode"]["inputSchema"]["properties"]


def test_invoke_barcode_end_to_end(client, mock_repo):
    """
    [시나리오] 3017620422003 + status 1 + energy-kcal_100g 539
    """
    mock_repo.fetch.return_value = {
        "status": 1,
        "product": {"code": "3017620422003", "nutriments": {"energy-kcal_100g": 539}},
    }

    response = client.post("/entrypoints/barcode/invoke", json={"input": {"barcode": "3017620422003"}})

    assert response.status_code == 200
    output = response.json()["output"]
    assert output["found"] is True
    assert output["product"]["nutritionPer100g"]["energy_kcal"] == 539


def test_invoke_barcode_not_found(client, mock_repo):
    mock_repo.fetch.return_value = {"status": 0}

    response = client.post("/entrypoints/barcode/invoke", json={"input": {"barcode": "000"}})

    assert response.status_code == 200
    assert response.json() == {
        "output": {"found": False, "barcode": "000", "message": "Product not found"}
    }


def test_invoke_category_end_to_end(client, mock_repo):
    mock_repo.fetch.return_value = {
        "count": 87,
        "products": [{"code": str(i)} for i in range(12)],
    }

    response = client.post(
        "/entrypoints/category/invoke",
        json={"input": {"category": "Breakfast Cereals", "limit": 5}},
    )

    output = response.json()["output"]
    assert len(output["products"]) == 5
    assert output["count"] == 87
    mock_repo.fetch.assert_called_once_with("/category/breakfast-cereals.json")


@pytest.mark.parametrize("limit", [0, 51])
def test_invoke_search_rejects_limit_out_of_range(client, mock_repo, limit):
    response = client.post(
        "/entrypoints/search/invoke",
        json={"input": {"query": "chocolate", "limit": limit}},
    )

    assert response.status_code == 422
    mock_repo.fetch.assert_not_called()


def test_invoke_overview_without_body(client, mock_repo):
    mock_repo.fetch.return_value = {"status": 1, "product": {"product_name": "Nutella"}}

    response = client.post("/entrypoints/overview/invoke")

    assert response.status_code == 200
    output = response.json()["output"]
    assert output["sampleProduct"]["name"] == "Nutella"
    assert len(output["endpoints"]) == 5


def test_invoke_unknown_entrypoint(client, mock_repo):
    response = client.post("/entrypoints/recipes/invoke", json={"input": {}})

    assert response.status_code == 404
    mock_repo.fetch.assert_not_called()


def test_upstream_error_maps_to_502(client, mock_repo):
    mock_repo.fetch.side_effect = UpstreamError(500)

    response = client.post("/entrypoints/nutrition/invoke", json={"input": {"barcode": "1"}})

    assert response.status_code == 502
    assert response.json()["upstreamStatus"] == 500
