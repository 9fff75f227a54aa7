"""
Shared fixtures for the database-backed tests.
Each test case gets a fresh SQLite file (via aiosqlite) with the full schema.
"""

import os
import sys
import tempfile
import unittest

from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

root_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if root_dir not in sys.path:
    sys.path.insert(0, root_dir)

from app.database import Base  # noqa: E402
import app.models  # noqa: E402,F401


def _enable_savepoints(engine):
    """Let pysqlite/aiosqlite honour SAVEPOINT (SQLAlchemy's documented recipe)."""

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """Creates the schema in a temp SQLite database and opens `self.db`."""

    async def asyncSetUp(self):
        fd, self.db_path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        self.engine = create_async_engine(f"sqlite+aiosqlite:///{self.db_path}")
        _enable_savepoints(self.engine)
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.Session = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        self.db = self.Session()

    async def asyncTearDown(self):
        await self.db.close()
        await self.engine.dispose()
        os.remove(self.db_path)

    async def count(self, model, *conditions) -> int:
        """Count rows from a separate session so only committed data is seen."""
        async with self.Session() as session:
            q = select(func.count()).select_from(model)
            if conditions:
                q = q.where(*conditions)
            return (await session.execute(q)).scalar_one()

    async def fetch_all(self, model, *conditions) -> list:
        async with self.Session() as session:
            q = select(model)
            if conditions:
                q = q.where(*conditions)
            return list((await session.execute(q)).scalars().all())
