from fastapi import APIRouter

from book_catalog_api.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok", "version": settings.app_version}
