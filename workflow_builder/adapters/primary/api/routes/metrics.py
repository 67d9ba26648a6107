from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Depends, Response

from workflow_builder.adapters.primary.api.dependencies import get_session_repository
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.metrics import metrics_registry

router = APIRouter(tags=["Metrics"])

@router.get("/metrics")
async def metrics(repository: ISessionRepository = Depends(get_session_repository)):
    """
    Prometheus scrape endpoint. Refreshes the open-session gauge before rendering.
    """
    metrics_registry.set_active_sessions(len(repository.list_ids()))
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
