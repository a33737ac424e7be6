# routers/well_known_router.py
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, PlainTextResponse

import config
from services.endpoint_registry import ENDPOINT_REGISTRY

router = APIRouter(tags=["Service Metadata"])

REGISTRATION_TYPE = "https://eips.ethereum.org/EIPS/eip-8004#registration-v1"
A2A_PROTOCOL_VERSION = "0.3.0"


# -------------------------------------------------------------------
# 아이콘 (파일이 없으면 404)
# -------------------------------------------------------------------
@router.get("/icon.png")
def get_icon():
    icon = Path(config.ICON_PATH)
    if icon.is_file():
        return FileResponse(icon, media_type="image/png")
    return PlainTextResponse("Not found", status_code=404)


# -------------------------------------------------------------------
# ERC-8004 등록 문서
# -------------------------------------------------------------------
@router.get("/.well-known/erc8004.json")
def get_registration():
    base_url = config.public_base_url()
    return {
        "type": REGISTRATION_TYPE,
        "name": config.AGENT_NAME,
        "description": (
            "Food & nutrition intelligence - barcode lookup, product search, nutritional data. "
            "Powered by Open Food Facts. 1 free + 5 paid endpoints via x402."
        ),
        "image": f"{base_url}/icon.png",
        "services": [
            {"name": "web", "endpoint": base_url},
            {
                "name": "A2A",
                "endpoint": f"{base_url}/.well-known/agent.json",
                "version": A2A_PROTOCOL_VERSION,
            },
        ],
        "x402Support": True,
        "active": True,
        "registrations": [],
        "supportedTrust": ["reputation"],
    }


# -------------------------------------------------------------------
# A2A 에이전트 카드 (엔드포인트 + 가격)
# -------------------------------------------------------------------
@router.get("/.well-known/agent.json")
def get_agent_card():
    base_url = config.public_base_url()
    return {
        "name": config.AGENT_NAME,
        "version": config.AGENT_VERSION,
        "description": config.AGENT_DESCRIPTION,
        "url": base_url,
        "protocolVersion": A2A_PROTOCOL_VERSION,
        "capabilities": {"streaming": False},
        "defaultInputModes": ["application/json"],
        "defaultOutputModes": ["application/json"],
        "skills": [
            {
                "id": spec.key,
                "name": spec.key,
                "description": spec.description,
                "url": f"{base_url}/entrypoints/{spec.key}/invoke",
                "price": spec.display_price,
                "priceAmount": spec.price,
            }
            for spec in ENDPOINT_REGISTRY.values()
        ],
    }
