from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends, Response, status

from workflow_builder.adapters.primary.api.dependencies import get_session_repository
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.config import settings
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["Health"])

@router.get("/health")
async def health_check(
    response: Response,
    repository: ISessionRepository = Depends(get_session_repository),
):
    dependencies = {
        "session_store": "healthy",
        "export_dir": "unknown",
    }
    healthy = True

    export_dir = Path(settings.EXPORT_DIR)
    try:
        export_dir.mkdir(parents=True, exist_ok=True)
        dependencies["export_dir"] = "healthy"
    except OSError as e:
        logger.error("health_check_failed", dependency="export_dir", error=str(e))
        dependencies["export_dir"] = "unhealthy"
        healthy = False

    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.APP_VERSION,
        "active_sessions": len(repository.list_ids()),
        "dependencies": dependencies
    }
