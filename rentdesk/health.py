# rentdesk/health.py
from fastapi import APIRouter

from rentdesk.config import get_settings

router = APIRouter()


@router.get("/info")
def service_info():
    settings = get_settings()
    return {"status": "ok", "app": settings.app_name, "mock_data": settings.use_mock_data}


@router.get("/health")
def health():
    return {"ok": True}
