# repositories/open_food_facts_repository.py
from typing import Any, Optional

import requests
from loguru import logger

import config


class UpstreamError(Exception):
    """
    Open Food Facts 호출 실패
    - status_code: 업스트림 HTTP 상태 코드 (통신 자체가 실패하면 None)
    """
    def __init__(self, status_code: Optional[int] = None, message: str = ""):
        self.status_code = status_code
        super().__init__(message or f"API error: {status_code}")


class OpenFoodFactsRepository:
    """
    Open Food Facts 읽기 전용 클라이언트
    (요청 1회 = 시도 1회, 재시도 없음)
    """
    def __init__(self):
        self.base_url = config.OFF_BASE_URL.rstrip("/")
        self.timeout = config.OFF_TIMEOUT_SECONDS
        self.headers = {"User-Agent": config.OFF_USER_AGENT}

    def fetch(self, path_and_query: str) -> Any:
        """
        path_and_query 예: "/api/v0/product/3017620422003.json"
        성공(2xx)이면 JSON 파싱 결과를 반환, 그 외에는 UpstreamError
        """
        url = f"{self.base_url}{path_and_query}"
        logger.debug(f"[OFF] GET {url}")

        try:
            r = requests.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"[OFF] Request failed: {url} ({e})")
            raise UpstreamError(None, f"API request failed: {e}") from e

        if not 200 <= r.status_code < 300:
            logger.warning(f"[OFF] HTTP {r.status_code} for {url}")
            raise UpstreamError(r.status_code)

        try:
            return r.json()
        except ValueError as e:
            # 2xx인데 본문이 JSON이 아닌 경우 (점검 페이지 등)
            logger.warning(f"[OFF] Invalid JSON body from {url}")
            raise UpstreamError(r.status_code, "API returned a non-JSON body") from e
