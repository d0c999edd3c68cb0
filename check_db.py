"""Print row counts for the tables this API reads, using the service credential."""

import asyncio

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fitsnap.db.session import service_engine, service_session_maker
from fitsnap.models import *  # noqa: F401, F403
from fitsnap.db.base import Base


async def check_data():
    async with service_session_maker() as session:
        tables = sorted(Base.metadata.tables)
        print(f"Checking tables: {tables}")
        for table in tables:
            try:
                result = await session.execute(text(f"SELECT count(*) FROM {table}"))
                print(f"Table '{table}' row count: {result.scalar()}")
            except SQLAlchemyError as e:
                print(f"Error querying {table}: {e}")
                await session.rollback()
    await service_engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
