from fastapi import Request, status
from fastapi.responses import JSONResponse
from workflow_builder.domain.workflow.exceptions import WorkflowException
from workflow_builder.shared.logger import get_logger
from workflow_builder.shared.metrics import metrics_registry

logger = get_logger(__name__)

NOT_FOUND_CODES = {"NODE_NOT_FOUND", "SESSION_NOT_FOUND", "SNAPSHOT_NOT_FOUND"}
CONFLICT_CODES = {"CANNOT_DELETE_ROOT", "NO_AVAILABLE_SLOT", "TERMINAL_NODE"}

async def workflow_exception_handler(request: Request, exc: WorkflowException):
    """
    Global exception handler for WorkflowException and its subclasses.
    Converts domain exceptions to structured JSON responses.

    A rejected edit never reaches history, so the client sees an error while
    the session's present snapshot stays as it was.
    """
    logger.warning(
        "workflow_command_rejected",
        error_code=exc.error_code,
        message=exc.message,
        context=exc.context,
        path=request.url.path
    )
    endpoint = getattr(request.scope.get("endpoint"), "__name__", "unknown")
    metrics_registry.record_command(endpoint, exc.error_code.lower())

    # Map error codes to HTTP status codes
    status_code = status.HTTP_400_BAD_REQUEST
    if exc.error_code in NOT_FOUND_CODES:
        status_code = status.HTTP_404_NOT_FOUND
    elif exc.error_code in CONFLICT_CODES:
        status_code = status.HTTP_409_CONFLICT

    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "message": exc.message,
                "error_code": exc.error_code,
                "context": exc.context
            }
        }
    )

async def general_exception_handler(request: Request, exc: Exception):
    """
    Fallback handler for all unhandled exceptions.
    """
    logger.exception("unhandled_exception", path=request.url.path)

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "message": "Internal processing error",
                "error_code": "INTERNAL_SERVER_ERROR",
                "context": {"type": str(type(exc).__name__)}
            }
        }
    )
