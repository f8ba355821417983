import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse
from pos_inventory.core.db import init_db, close_db
from pos_inventory.api.v1.inventory import REDUCE_REQUEST_BODY, router as inventory_router, reduce_inventory_endpoint
from pos_inventory.core.config import CORS_HEADERS, LOG_LEVEL, PROJECT_NAME, VERSION
from pos_inventory.core.exception_handlers import setup_exception_handlers
from pos_inventory.schemas.inventory import ReduceInventoryResponse

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("pos_inventory")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db()  # Connect to DB and generate schemas
    yield
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    """Answers preflight requests and stamps the CORS headers on every response."""
    if request.method == "OPTIONS":
        return PlainTextResponse("ok", headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


# Include routers for modular API structure
app.include_router(inventory_router, prefix="/api/v1/inventory", tags=["Inventory"])

# Path used by existing dashboard clients of the reduce-inventory function
app.add_api_route(
    "/functions/v1/reduce-inventory",
    reduce_inventory_endpoint,
    methods=["POST"],
    response_model=ReduceInventoryResponse,
    response_model_exclude_none=True,
    openapi_extra=REDUCE_REQUEST_BODY,
    tags=["Inventory"],
)

setup_exception_handlers(app)


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
