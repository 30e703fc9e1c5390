"""
Mock Storefront Backend

In-memory implementation of the storefront cart and order REST API,
for running the cart client locally and in end-to-end tests.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import cart_router, orders_router
from .errors import install_error_handlers

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if os.getenv("MOCK_BACKEND_DEBUG") else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock storefront backend starting up...")
    yield
    logger.info("Mock storefront backend shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Storefront Backend",
    description="In-memory storefront cart and order API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Include API routers
app.include_router(cart_router)
app.include_router(orders_router)


@app.get("/")
async def home():
    """API index"""
    return {
        "message": "Mock Storefront API",
        "docs": "/docs",
        "endpoints": {
            "cart": "/api/cart",
            "orders": "/api/orders",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "mock-storefront-backend"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_backend.main:app",
        host=os.getenv("MOCK_BACKEND_HOST", "0.0.0.0"),
        port=int(os.getenv("MOCK_BACKEND_PORT", "5000")),
        reload=bool(os.getenv("MOCK_BACKEND_DEBUG")),
    )
