import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import create_tables, AsyncSessionLocal
from app.api.v1.router import api_router
from app.repositories.sqlalchemy_calendar_repository import SqlAlchemyUserRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting up Campus Calendar API...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # Create database tables
    await create_tables()
    logger.info("Database tables created successfully")

    # Records created without an acting user are attributed to the system actor
    async with AsyncSessionLocal() as db:
        try:
            actor = await SqlAlchemyUserRepository(db).ensure_system_actor(
                settings.SYSTEM_ACTOR_ID,
                username=settings.SYSTEM_ACTOR_USERNAME,
                email=settings.SYSTEM_ACTOR_EMAIL,
                full_name=settings.SYSTEM_ACTOR_FULL_NAME
            )
            logger.info(f"System actor created/verified: {actor.username}")
        except Exception as e:
            logger.error(f"Error creating system actor: {e}")

    logger.info("Campus Calendar API startup complete")

    yield

    # Shutdown
    logger.info("Shutting down Campus Calendar API...")


# Create FastAPI application
app = FastAPI(
    title="Campus Calendar API",
    description="Academic calendar, holiday conflict detection and calendar reporting",
    version="1.0.0",
    lifespan=lifespan,
    redirect_slashes=False,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


# Health check endpoint
@app.get("/")
async def root():
    return {
        "message": "Campus Calendar API",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "message": "Campus Calendar API is running successfully"
    }
