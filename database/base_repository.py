"""Base repository pattern for database operations."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional, Sequence

import aiosqlite

from database.connection import get_db_pool


class BaseRepository:
    """Base repository with common database operations."""

    @staticmethod
    async def execute(query: str, params: Sequence[Any] = ()) -> int:
        """Execute a query and return the number of affected rows."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            cursor = await conn.execute(query, params)
            await conn.commit()
            return cursor.rowcount

    @staticmethod
    async def fetch_one(query: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        """Fetch a single row."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            cursor = await conn.execute(query, params)
            return await cursor.fetchone()

    @staticmethod
    async def fetch_all(query: str, params: Sequence[Any] = ()) -> List[aiosqlite.Row]:
        """Fetch all rows."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            cursor = await conn.execute(query, params)
            return [row async for row in cursor]

    @staticmethod
    async def fetch_value(query: str, params: Sequence[Any] = ()) -> Optional[Any]:
        """Fetch a single value from a single row."""
        row = await BaseRepository.fetch_one(query, params)
        return row[0] if row else None

    @staticmethod
    @asynccontextmanager
    async def transaction_connection() -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection inside ``BEGIN IMMEDIATE``; commit on exit, rollback on error."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise
