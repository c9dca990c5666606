from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import settings

# Create async engine
engine = create_async_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# Holiday/event writes read existing rows and then insert; run them at a
# stricter isolation level so two concurrent writers cannot both pass the check
write_engine = engine.execution_options(isolation_level=settings.CALENDAR_WRITE_ISOLATION_LEVEL)

# Create async session makers
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
    class_=AsyncSession
)

CalendarWriteSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=write_engine,
    class_=AsyncSession
)

# Base class for models
Base = declarative_base()

# Dependency for the holiday and event endpoints
async def get_calendar_write_db():
    async with CalendarWriteSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

# Create all tables
async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
