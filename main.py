from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger

from config import DEBUG, ENVIRONMENT, SQLALCHEMY_DATABASE_URL, VERSION
from database import DatabaseManager
from services.gateway import PersistenceGateway
from utils.logging_config import setup_logging

# Setup logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Admin WebApp...")
    logger.info("Environment: {}", ENVIRONMENT)
    logger.info("Version: {}", VERSION)

    gateway = PersistenceGateway(DatabaseManager(SQLALCHEMY_DATABASE_URL))
    try:
        await gateway.initialize()
    except Exception as e:
        logger.critical("Failed to initialize database: {}", e)
        raise
    app.state.gateway = gateway

    yield

    # Shutdown
    logger.info("Shutting down Admin WebApp...")
    await gateway.close()


def get_gateway(request: Request) -> PersistenceGateway:
    """FastAPI dependency handing routers the gateway built at startup"""
    return request.app.state.gateway


app = FastAPI(
    title="Admin WebApp",
    description="Administration backend for users, settings, files and comments",
    version=VERSION,
    debug=DEBUG,
    lifespan=lifespan,
)

if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Uvicorn server...")

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=DEBUG,
        log_level="error",
        access_log=False,
    )
