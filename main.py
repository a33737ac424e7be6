#main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

import config
from logging_config import setup_logging
from repositories.open_food_facts_repository import UpstreamError
from routers import entrypoint_router, well_known_router


# 로깅 설정
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"{config.AGENT_NAME} running on port {config.PORT}")
    yield

app = FastAPI(
    title="food-intel API",
    version=config.AGENT_VERSION,
    description=config.AGENT_DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(entrypoint_router.router)
app.include_router(well_known_router.router)


# 업스트림(Open Food Facts) 실패 -> 502 (부분 데이터 없음)
@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error(f"Upstream failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={
            "detail": "Upstream food database error",
            "upstreamStatus": exc.status_code,
        },
    )


@app.get("/")
def index():
    return {"message": "food-intel API Service"}


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
