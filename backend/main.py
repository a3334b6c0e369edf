"""
QuizSense Backend - Main FastAPI Application

Test submission scoring with AI-assisted evaluation.
Version: 2.0
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from quizsense import __version__
from quizsense.config.settings import settings
from quizsense.routes import (
    create_evaluation_routes,
    create_question_routes,
    create_results_routes
)
from quizsense.services import ServiceContainer, build_services

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def _create_indexes(db: AsyncIOMotorDatabase):
    """Create database indexes for performance."""
    try:
        # Questions
        await db.questions.create_index("question_id", unique=True)
        await db.questions.create_index([("type", 1), ("difficulty", 1)])
        await db.questions.create_index([("subject", 1), ("topic", 1)])
        
        # Tests
        await db.tests.create_index("test_id", unique=True)
        
        # Results
        await db.results.create_index("result_id", unique=True)
        await db.results.create_index([("user_id", 1), ("test_id", 1)])
        await db.results.create_index([("submitted_at", -1)])
        
    except Exception as e:
        logger.warning(f"Index creation warning: {e}")
        # Don't fail startup if indexes already exist


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to MongoDB and wire services unless they were injected."""
    client: Optional[AsyncIOMotorClient] = None
    
    if getattr(app.state, "services", None) is None:
        logger.info("🚀 QuizSense Backend Starting Up...")
        
        try:
            settings.validate()
            
            client = AsyncIOMotorClient(
                settings.MONGODB_URL,
                maxPoolSize=50,
                serverSelectionTimeoutMS=5000
            )
            await client.server_info()
            db = client[settings.DATABASE_NAME]
            logger.info(f"✅ Connected to MongoDB: {settings.DATABASE_NAME}")
            
            await _create_indexes(db)
            app.state.services = build_services(db)
            logger.info("✅ Application startup complete")
        except Exception as e:
            logger.error(f"❌ Startup failed: {e}")
            raise
    
    yield
    
    if client is not None:
        logger.info("🛑 Shutting down...")
        client.close()
        logger.info("✅ Database connection closed")


def create_app(services: Optional[ServiceContainer] = None) -> FastAPI:
    """Build the application. Pass `services` to skip the MongoDB connection."""
    app = FastAPI(
        title="QuizSense API",
        description="Test submission scoring and AI-assisted evaluation",
        version=__version__,
        lifespan=lifespan
    )
    app.state.services = services
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # TODO: restrict to the frontend origin once it has a fixed domain
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.include_router(create_evaluation_routes())
    app.include_router(create_results_routes())
    app.include_router(create_question_routes())
    
    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "services": "ready" if app.state.services is not None else "starting"
        }
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
