from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from dashboard.db.settings import get_settings


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Rows stay readable after commit; a rollback still expires them.
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


settings = get_settings()

engine = create_async_engine(settings.database_url, future=True)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
