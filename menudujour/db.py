from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from dotenv import load_dotenv
from menudujour.core.config import get_settings
from menudujour.models.base import Base

# Load environment (.env for local runs)
load_dotenv()

settings = get_settings()

DATABASE_URL = settings.database_url
if not DATABASE_URL:
    raise ValueError("❌ DATABASE_URL is not set!")

# Create engine
engine = create_async_engine(DATABASE_URL, echo=settings.sql_echo, pool_pre_ping=True)

# Async session maker
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# Dependency
async def get_db():
    async with async_session() as session:
        yield session


async def create_db_and_tables():
    import menudujour.models  # registers every model on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
