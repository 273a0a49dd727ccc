"""Database schema migrations."""

from __future__ import annotations

from core.logger import get_logger

from .connection import OptimizedSQLitePool

logger = get_logger(__name__)


SCHEMA_SQL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT UNIQUE NOT NULL,
        password_hash TEXT NOT NULL,
        name TEXT NOT NULL DEFAULT '',
        avatar_url TEXT,
        created_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS raffles (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'draft'
            CHECK (status IN ('draft', 'active', 'drawing', 'completed')),
        qr_code_expires_at TEXT,
        created_by TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY(created_by) REFERENCES users(id) ON DELETE SET NULL
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_raffles_status ON raffles(status);",
    "CREATE INDEX IF NOT EXISTS idx_raffles_created_at ON raffles(created_at);",
    """
    CREATE TABLE IF NOT EXISTS participants (
        id TEXT PRIMARY KEY,
        raffle_id TEXT NOT NULL,
        user_id TEXT NOT NULL,
        ticket_count INTEGER NOT NULL DEFAULT 1 CHECK (ticket_count > 0),
        joined_at TEXT NOT NULL,
        UNIQUE(raffle_id, user_id),
        FOREIGN KEY(raffle_id) REFERENCES raffles(id) ON DELETE CASCADE,
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_participants_raffle ON participants(raffle_id);",
    "CREATE INDEX IF NOT EXISTS idx_participants_user ON participants(user_id, joined_at);",
    """
    CREATE TABLE IF NOT EXISTS prizes (
        id TEXT PRIMARY KEY,
        raffle_id TEXT NOT NULL,
        name TEXT NOT NULL,
        description TEXT,
        sort_order INTEGER NOT NULL DEFAULT 0,
        awarded_to TEXT,
        awarded_at TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY(raffle_id) REFERENCES raffles(id) ON DELETE CASCADE,
        FOREIGN KEY(awarded_to) REFERENCES users(id) ON DELETE SET NULL
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_prizes_raffle ON prizes(raffle_id, sort_order);",
    """
    CREATE TABLE IF NOT EXISTS winners (
        id TEXT PRIMARY KEY,
        raffle_id TEXT NOT NULL,
        prize_id TEXT,
        user_id TEXT NOT NULL,
        tickets_at_win INTEGER NOT NULL,
        won_at TEXT NOT NULL,
        FOREIGN KEY(raffle_id) REFERENCES raffles(id) ON DELETE CASCADE,
        FOREIGN KEY(prize_id) REFERENCES prizes(id) ON DELETE SET NULL,
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_winners_raffle ON winners(raffle_id, won_at);",
    "CREATE INDEX IF NOT EXISTS idx_winners_user ON winners(user_id, won_at);",
)


async def run_migrations(pool: OptimizedSQLitePool) -> None:
    async with pool.connection() as conn:
        await conn.execute("BEGIN")
        try:
            for statement in SCHEMA_SQL:
                await conn.execute(statement)
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
    logger.info(f"Applied {len(SCHEMA_SQL)} schema statements")
