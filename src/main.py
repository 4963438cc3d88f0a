# Initialization order:
# 1. Load environment variables
# 2. Validate configuration (blocking - must pass)
# 3. Connect to MongoDB and create indexes
# 4. Start application

# STEP 1: Load environment variables
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

# STEP 2: Settings are validated when the config module is first imported
from src.config import config
from src.controllers import operational_controller
from src.core.errors import (
    ErrorResponse,
    error_response_handler,
    http_exception_handler,
    validation_exception_handler,
)
from src.core.indexes import create_indexes
from src.core.logger import logger
from src.db import mongodb
from src.middlewares import CorrelationIdMiddleware, RequestTimeoutMiddleware
from src.routers import (
    category_router,
    order_router,
    product_router,
    review_router,
    user_router,
)


# STEP 3: Database connection and indexes
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Service starting",
        metadata={
            "operation": "startup",
            "service": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
        },
    )
    await mongodb.connect_to_mongo()
    await create_indexes(await mongodb.get_database())
    yield
    await mongodb.close_mongo_connection()
    logger.info("Service stopped", metadata={"operation": "shutdown"})


app = FastAPI(
    title=config.service_name,
    version=config.service_version,
    lifespan=lifespan,
)

# Last added runs first: correlation id is set before the timeout starts
app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=config.request_timeout_seconds)
app.add_middleware(CorrelationIdMiddleware)

# Register centralized error handlers
app.add_exception_handler(ErrorResponse, error_response_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Include routers
app.include_router(user_router, prefix="/api/users", tags=["users"])
app.include_router(category_router, prefix="/api/categories", tags=["categories"])
app.include_router(product_router, prefix="/api/products", tags=["products"])
app.include_router(order_router, prefix="/api/orders", tags=["orders"])
app.include_router(review_router, prefix="/api/reviews", tags=["reviews"])

# Operational endpoints for infrastructure/monitoring
app.get("/health")(operational_controller.health)
app.get("/health/ready")(operational_controller.readiness)
app.get("/health/live")(operational_controller.liveness)

if __name__ == "__main__":
    # STEP 4: Start the server
    logger.info(
        f"Storefront API starting on port {config.port}",
        metadata={
            "service": {
                "name": config.service_name,
                "version": config.service_version,
                "environment": config.environment,
                "port": config.port,
            }
        },
    )
    uvicorn.run("src.main:app", host=config.host, port=config.port, reload=not config.is_production)
