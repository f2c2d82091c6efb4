from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rentdesk.config import get_settings
from rentdesk.dependencies.services import get_backend_client_cached

from rentdesk.health import router as health_router
from rentdesk.mock_data_view import router as mock_data_router
from rentdesk.tools.drafts import router as drafts_router
from rentdesk.tools.orders import router as orders_router
from rentdesk.tools.payments import router as payments_router
from rentdesk.tools.products import router as products_router
from rentdesk.tools.rentals import router as rentals_router
from rentdesk.tools.reports import router as reports_router

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the effective configuration on startup and release the backend client on shutdown."""
    current = get_settings()
    logger.info(
        "Starting %s with settings: %s",
        current.app_name,
        current.model_dump(exclude={"backend_token"}),
    )

    client = get_backend_client_cached()
    if client.use_mock_data:
        logger.info("Serving from the in-memory mock store.")
    else:
        logger.info("Forwarding to rental backend at %s.", client.base_url)

    try:
        yield
    finally:
        await client.close()
        logger.info("Rental backend client closed; shutdown complete.")


app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.cors_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rental tools
app.include_router(drafts_router, prefix="/tools/drafts", tags=["drafts"])
app.include_router(orders_router, prefix="/tools/orders", tags=["orders"])
app.include_router(products_router, prefix="/tools/products", tags=["products"])
app.include_router(rentals_router, prefix="/tools/rentals", tags=["rentals"])
app.include_router(reports_router, prefix="/tools/reports", tags=["reports"])
app.include_router(payments_router, prefix="/tools/payments", tags=["payments"])

# Service endpoints
app.include_router(health_router)
app.include_router(mock_data_router)

# Run locally with: uvicorn rentdesk.main:app --reload
