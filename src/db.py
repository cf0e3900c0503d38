from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.load_secrets import db_backend

if db_backend == "sqlite":
    from src.create_sqlite_engine import engine
else:
    from src.create_postgres_engine import engine

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    bind=engine,
)
