import contextlib
from collections.abc import AsyncIterator

from alembic import command, config
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.config.settings import settings


def create_engine(url: str):
    url = str(url)
    engine_kwargs = {}
    if "sqlite" in url:
        engine_kwargs["connect_args"] = {"timeout": 15}
    else:
        engine_kwargs["pool_pre_ping"] = True
    return create_async_engine(
        url,
        echo=settings.LOG_DB,
        future=True,  # use the sqlalchemy 2.0 classes
        **engine_kwargs,
    )


engine = create_engine(settings.database_url)

async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


def run_upgrade(connection, cfg):
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, "head")


async def upgrade_database(alembic_ini: str = "alembic.ini") -> None:
    """Apply pending migrations over the application's own engine."""
    async with engine.begin() as conn:
        await conn.run_sync(run_upgrade, config.Config(alembic_ini))


async def get_async_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        yield session


@contextlib.asynccontextmanager
async def async_session_manager(
    auto_commit=True, session_overwrite: AsyncSession | None = None
) -> AsyncIterator[AsyncSession]:
    """Session scope for the write and read models.

    A ``session_overwrite`` is yielded as is and never committed here, so
    tests can run several models inside one transaction and roll it back.
    """
    if session_overwrite:
        yield session_overwrite
    else:
        async with async_session_maker() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                raise e
            else:
                if auto_commit:
                    await session.commit()
