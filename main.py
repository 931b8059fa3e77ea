# main.py
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from storage import FlatFileStorage
from Services.rental_system import RentalSystem
from Services.customer_router import router as customer_router
from Services.rental_router import router as rental_router
from Services.vehicle_router import router as vehicle_router

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load the ledger once unless the caller already supplied one
    if app.state.rental_system is None:
        logger.info("Loading rental ledger...")
        app.state.rental_system = RentalSystem.from_storage(FlatFileStorage.from_env())
        logger.info("Rental ledger loaded successfully")
    yield


def create_app(rental_system: Optional[RentalSystem] = None) -> FastAPI:
    app = FastAPI(
        title="Rental Ledger API",
        description="""
        API for the vehicle rental ledger:
        - Vehicle registration and lookup
        - Customer registration and lookup
        - Renting and returning vehicles
        - Rental history
        """,
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.rental_system = rental_system

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handler for detailed error messages
    @app.exception_handler(Exception)
    async def debug_exception_handler(request: Request, exc: Exception):
        logger.error(f"Error processing request: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc), "type": type(exc).__name__}
        )

    # Include routers
    app.include_router(
        vehicle_router,
        prefix="/api/vehicles",
        tags=["vehicles"]
    )

    app.include_router(
        customer_router,
        prefix="/api/customers",
        tags=["customers"]
    )

    app.include_router(
        rental_router,
        prefix="/api/rentals",
        tags=["rentals"]
    )

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to the Rental Ledger API",
            "version": "1.0.0",
            "docs_url": "/docs",
            "redoc_url": "/redoc"
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )
