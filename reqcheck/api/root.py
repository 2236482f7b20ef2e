from fastapi import APIRouter

from reqcheck.core.config import settings

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "reqcheck",
        "status": "ok",
        "env": settings.APP_ENV,
        "docs": "/docs",
        "health": "/health",
        "preview": "/validate/preview",
    }
