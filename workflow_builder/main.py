from contextlib import asynccontextmanager
from fastapi import FastAPI

from workflow_builder.adapters.primary.api.routes.sessions import router
from workflow_builder.adapters.primary.api.routes.health import router as health_router
from workflow_builder.adapters.primary.api.routes.metrics import router as metrics_router
from workflow_builder.shared.config import settings
from workflow_builder.shared.logger import configure_logging, get_logger

# Configure logging early
configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "application_started",
        version=settings.APP_VERSION,
        history_max_depth=settings.HISTORY_MAX_DEPTH,
        export_dir=settings.EXPORT_DIR,
    )
    yield
    logger.info("application_shutdown_complete")


app = FastAPI(
    title=settings.APP_NAME,
    description="Workflow tree editing with undo/redo history.",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Exceptions
from workflow_builder.domain.workflow.exceptions import WorkflowException
from workflow_builder.adapters.primary.api.error_handlers import workflow_exception_handler, general_exception_handler

app.add_exception_handler(WorkflowException, workflow_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Routes
app.include_router(router)
app.include_router(health_router)
app.include_router(metrics_router)
