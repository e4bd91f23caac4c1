# socialnet/db/session.py
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from socialnet.core.config import settings


def _engine_kwargs(db_url: str) -> dict:
    """
    Timeouts cortos: si la DB no responde → falla rápido.
    SQLite no acepta pool_size/max_overflow en memoria, así que no se los pasamos.
    """
    timeout = settings.DB_TIMEOUT_SECONDS
    if db_url.startswith("postgresql+asyncpg"):
        # asyncpg usa 'timeout' (segundos) y 'command_timeout' por query
        connect_args = {
            "timeout": timeout,
            "command_timeout": timeout,
            "server_settings": {"client_encoding": "UTF8"},
        }
    elif db_url.startswith("sqlite+aiosqlite"):
        return {"connect_args": {"timeout": timeout}}
    else:
        connect_args = {}

    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": timeout,
        "connect_args": connect_args,
    }


def enable_sqlite_fk(engine) -> None:
    """SQLite ignora ON DELETE CASCADE si no se activa foreign_keys por conexión."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_fk_pragma(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


db_url = settings.DATABASE_URL

engine = create_async_engine(db_url, **_engine_kwargs(db_url))
if db_url.startswith("sqlite"):
    enable_sqlite_fk(engine)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
