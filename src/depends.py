from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


def build_engine(db_uri: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for db_uri

    SQLite has no row locks, so every transaction opens with BEGIN IMMEDIATE:
    writers queue on the database lock (up to SQLITE_BUSY_TIMEOUT) instead of
    interleaving reads and writes.
    """
    if not db_uri.startswith("sqlite"):
        return create_async_engine(db_uri, echo=echo, future=True)

    engine = create_async_engine(
        db_uri,
        echo=echo,
        future=True,
        connect_args={"timeout": ApplicationConfig.SQLITE_BUSY_TIMEOUT},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Stop the driver from issuing its own BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


engine = build_engine(ApplicationConfig.DB_URI, echo=ApplicationConfig.DB_ECHO)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)
