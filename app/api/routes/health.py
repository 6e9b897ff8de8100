from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name}


@router.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
