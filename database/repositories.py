"""Database access layer helpers."""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Tuple

from core.exceptions import ConflictError, RepositoryError
from database.base_repository import BaseRepository
from database.models import Participant, Prize, Raffle, User, Winner, row_to_model
from utils.dates import now_iso

# Sum of a user's tickets from participations joined after their latest win.
# Expects the user id to be bound twice.
_ACCUMULATED_TICKETS_SQL = """
    SELECT COALESCE(SUM(p2.ticket_count), 0)
    FROM participants p2
    WHERE p2.user_id = ?
      AND p2.joined_at > COALESCE(
          (SELECT MAX(w.won_at) FROM winners w WHERE w.user_id = ?), ''
      )
"""


def new_id() -> str:
    return str(uuid.uuid4())


class UserRepository(BaseRepository):
    """Repository for user accounts."""

    @staticmethod
    async def create(email: str, password_hash: str, name: str) -> User:
        user = User(
            id=new_id(),
            email=email,
            name=name,
            created_at=now_iso(),
            password_hash=password_hash,
        )
        await BaseRepository.execute(
            "INSERT INTO users (id, email, password_hash, name, created_at) VALUES (?, ?, ?, ?, ?)",
            (user.id, user.email, user.password_hash, user.name, user.created_at),
        )
        return user

    @staticmethod
    async def get_by_id(user_id: str) -> Optional[User]:
        row = await BaseRepository.fetch_one("SELECT * FROM users WHERE id=?", (user_id,))
        return row_to_model(User, row) if row else None

    @staticmethod
    async def get_by_email(email: str) -> Optional[User]:
        row = await BaseRepository.fetch_one("SELECT * FROM users WHERE email=?", (email,))
        return row_to_model(User, row) if row else None


class RaffleRepository(BaseRepository):
    """Repository for raffles."""

    @staticmethod
    async def create(name: str, created_by: Optional[str]) -> Raffle:
        raffle = Raffle(
            id=new_id(),
            name=name,
            status="draft",
            created_at=now_iso(),
            created_by=created_by,
        )
        await BaseRepository.execute(
            "INSERT INTO raffles (id, name, status, created_by, created_at) VALUES (?, ?, ?, ?, ?)",
            (raffle.id, raffle.name, raffle.status, raffle.created_by, raffle.created_at),
        )
        return raffle

    @staticmethod
    async def get(raffle_id: str) -> Optional[Raffle]:
        row = await BaseRepository.fetch_one("SELECT * FROM raffles WHERE id=?", (raffle_id,))
        return row_to_model(Raffle, row) if row else None

    @staticmethod
    async def list_all() -> List[Raffle]:
        rows = await BaseRepository.fetch_all(
            "SELECT * FROM raffles ORDER BY created_at DESC"
        )
        return [row_to_model(Raffle, row) for row in rows]

    @staticmethod
    async def list_with_winner_count() -> List[Dict[str, Any]]:
        rows = await BaseRepository.fetch_all(
            """
            SELECT r.*, (SELECT COUNT(*) FROM winners w WHERE w.raffle_id = r.id) AS winner_count
            FROM raffles r
            ORDER BY r.created_at DESC
            """
        )
        return [dict(row) for row in rows]

    @staticmethod
    async def list_history() -> List[Dict[str, Any]]:
        rows = await BaseRepository.fetch_all(
            """
            SELECT r.id, r.name, r.status, r.created_at,
                   (SELECT COUNT(*) FROM participants p WHERE p.raffle_id = r.id) AS participant_count,
                   (SELECT COUNT(*) FROM prizes z
                     WHERE z.raffle_id = r.id AND z.awarded_to IS NOT NULL) AS prizes_awarded,
                   (SELECT COUNT(*) FROM prizes z WHERE z.raffle_id = r.id) AS total_prizes
            FROM raffles r
            ORDER BY r.created_at DESC
            """
        )
        return [dict(row) for row in rows]

    @staticmethod
    async def activate(raffle_id: str, expires_at: str) -> bool:
        """Move a draft raffle to active. Returns False when it was not a draft."""
        updated = await BaseRepository.execute(
            "UPDATE raffles SET status='active', qr_code_expires_at=? WHERE id=? AND status='draft'",
            (expires_at, raffle_id),
        )
        return updated > 0

    @staticmethod
    async def set_qr_expiry(raffle_id: str, expires_at: str) -> bool:
        updated = await BaseRepository.execute(
            "UPDATE raffles SET qr_code_expires_at=? WHERE id=? AND status='active'",
            (expires_at, raffle_id),
        )
        return updated > 0

    @staticmethod
    async def set_status(raffle_id: str, status: str) -> bool:
        updated = await BaseRepository.execute(
            "UPDATE raffles SET status=? WHERE id=?",
            (status, raffle_id),
        )
        return updated > 0


class ParticipantRepository(BaseRepository):
    """Repository for raffle participations."""

    @staticmethod
    async def get(raffle_id: str, user_id: str) -> Optional[Participant]:
        row = await BaseRepository.fetch_one(
            "SELECT * FROM participants WHERE raffle_id=? AND user_id=?",
            (raffle_id, user_id),
        )
        return row_to_model(Participant, row) if row else None

    @staticmethod
    async def create(raffle_id: str, user_id: str, ticket_count: int = 1) -> Participant:
        """Insert a participation; raises ``sqlite3.IntegrityError`` if it already exists."""
        participant = Participant(
            id=new_id(),
            raffle_id=raffle_id,
            user_id=user_id,
            ticket_count=ticket_count,
            joined_at=now_iso(),
        )
        await BaseRepository.execute(
            "INSERT INTO participants (id, raffle_id, user_id, ticket_count, joined_at) VALUES (?, ?, ?, ?, ?)",
            (
                participant.id,
                participant.raffle_id,
                participant.user_id,
                participant.ticket_count,
                participant.joined_at,
            ),
        )
        return participant

    @staticmethod
    async def list_with_details(raffle_id: str) -> List[Dict[str, Any]]:
        rows = await BaseRepository.fetch_all(
            """
            SELECT p.id, p.user_id, p.ticket_count, p.joined_at,
                   u.name AS user_name, u.avatar_url AS user_avatar_url
            FROM participants p
            LEFT JOIN users u ON u.id = p.user_id
            WHERE p.raffle_id = ?
            ORDER BY p.joined_at DESC
            """,
            (raffle_id,),
        )
        return [dict(row) for row in rows]

    @staticmethod
    async def statistics(raffle_id: str) -> Tuple[int, int]:
        row = await BaseRepository.fetch_one(
            "SELECT COUNT(*), COALESCE(SUM(ticket_count), 0) FROM participants WHERE raffle_id=?",
            (raffle_id,),
        )
        return (row[0], row[1]) if row else (0, 0)

    @staticmethod
    async def list_for_user(user_id: str) -> List[Dict[str, Any]]:
        rows = await BaseRepository.fetch_all(
            """
            SELECT p.id, p.raffle_id, p.ticket_count, p.joined_at,
                   r.name AS raffle_name, r.status AS raffle_status
            FROM participants p
            JOIN raffles r ON r.id = p.raffle_id
            WHERE p.user_id = ?
            ORDER BY p.joined_at DESC
            """,
            (user_id,),
        )
        return [dict(row) for row in rows]

    @staticmethod
    async def accumulated_tickets(user_id: str) -> int:
        value = await BaseRepository.fetch_value(_ACCUMULATED_TICKETS_SQL, (user_id, user_id))
        return int(value or 0)

    @staticmethod
    async def draw_candidates(raffle_id: str) -> List[Dict[str, Any]]:
        """Participants of a raffle who have not won in it, with accumulated tickets."""
        rows = await BaseRepository.fetch_all(
            """
            SELECT p.user_id, u.name AS user_name,
                   (SELECT COALESCE(SUM(p2.ticket_count), 0)
                    FROM participants p2
                    WHERE p2.user_id = p.user_id
                      AND p2.joined_at > COALESCE(
                          (SELECT MAX(w.won_at) FROM winners w WHERE w.user_id = p.user_id), ''
                      )) AS tickets
            FROM participants p
            LEFT JOIN users u ON u.id = p.user_id
            WHERE p.raffle_id = ?
              AND p.user_id NOT IN (SELECT w2.user_id FROM winners w2 WHERE w2.raffle_id = ?)
            ORDER BY p.joined_at
            """,
            (raffle_id, raffle_id),
        )
        return [dict(row) for row in rows]


class PrizeRepository(BaseRepository):
    """Repository for prizes attached to raffles."""

    @staticmethod
    async def create(raffle_id: str, name: str, description: Optional[str]) -> Prize:
        prize_id = new_id()
        await BaseRepository.execute(
            """
            INSERT INTO prizes (id, raffle_id, name, description, sort_order, created_at)
            SELECT ?, ?, ?, ?, COALESCE(MAX(sort_order) + 1, 0), ?
            FROM prizes WHERE raffle_id = ?
            """,
            (prize_id, raffle_id, name, description, now_iso(), raffle_id),
        )
        prize = await PrizeRepository.get(prize_id)
        if prize is None:
            raise RepositoryError("Failed to create prize")
        return prize

    @staticmethod
    async def get(prize_id: str) -> Optional[Prize]:
        row = await BaseRepository.fetch_one("SELECT * FROM prizes WHERE id=?", (prize_id,))
        return row_to_model(Prize, row) if row else None

    @staticmethod
    async def list_for_raffle(raffle_id: str) -> List[Prize]:
        rows = await BaseRepository.fetch_all(
            "SELECT * FROM prizes WHERE raffle_id=? ORDER BY sort_order, created_at",
            (raffle_id,),
        )
        return [row_to_model(Prize, row) for row in rows]

    @staticmethod
    async def list_with_winner_names(raffle_id: str, limit: int) -> List[Dict[str, Any]]:
        rows = await BaseRepository.fetch_all(
            """
            SELECT z.id, z.name, z.description, z.sort_order, z.awarded_to, z.awarded_at,
                   u.name AS winner_name
            FROM prizes z
            LEFT JOIN users u ON u.id = z.awarded_to
            WHERE z.raffle_id = ?
            ORDER BY z.sort_order, z.created_at
            LIMIT ?
            """,
            (raffle_id, limit),
        )
        return [dict(row) for row in rows]

    @staticmethod
    async def update(prize_id: str, name: str, description: Optional[str]) -> bool:
        updated = await BaseRepository.execute(
            "UPDATE prizes SET name=?, description=? WHERE id=?",
            (name, description, prize_id),
        )
        return updated > 0

    @staticmethod
    async def delete(prize_id: str) -> bool:
        deleted = await BaseRepository.execute("DELETE FROM prizes WHERE id=?", (prize_id,))
        return deleted > 0

    @staticmethod
    async def count(raffle_id: str) -> int:
        value = await BaseRepository.fetch_value(
            "SELECT COUNT(*) FROM prizes WHERE raffle_id=?", (raffle_id,)
        )
        return int(value or 0)

    @staticmethod
    async def count_awarded(raffle_id: str) -> int:
        value = await BaseRepository.fetch_value(
            "SELECT COUNT(*) FROM prizes WHERE raffle_id=? AND awarded_to IS NOT NULL",
            (raffle_id,),
        )
        return int(value or 0)

    @staticmethod
    async def count_unawarded(raffle_id: str) -> int:
        value = await BaseRepository.fetch_value(
            "SELECT COUNT(*) FROM prizes WHERE raffle_id=? AND awarded_to IS NULL",
            (raffle_id,),
        )
        return int(value or 0)


class WinnerRepository(BaseRepository):
    """Repository for draw results."""

    @staticmethod
    async def record_win(winner: Winner) -> None:
        """Insert the winner row and mark the prize awarded in one transaction.

        Raises:
            ConflictError: If the prize was awarded concurrently, or the user
                already won a prize in this raffle
        """
        async with BaseRepository.transaction_connection() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM winners WHERE raffle_id=? AND user_id=? LIMIT 1",
                (winner.raffle_id, winner.user_id),
            )
            if await cursor.fetchone() is not None:
                raise ConflictError("User already won a prize in this raffle")
            cursor = await conn.execute(
                "UPDATE prizes SET awarded_to=?, awarded_at=? WHERE id=? AND awarded_to IS NULL",
                (winner.user_id, winner.won_at, winner.prize_id),
            )
            if cursor.rowcount == 0:
                raise ConflictError("Prize already awarded")
            await conn.execute(
                """
                INSERT INTO winners (id, raffle_id, prize_id, user_id, tickets_at_win, won_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    winner.id,
                    winner.raffle_id,
                    winner.prize_id,
                    winner.user_id,
                    winner.tickets_at_win,
                    winner.won_at,
                ),
            )

    @staticmethod
    async def list_for_raffle(raffle_id: str) -> List[Dict[str, Any]]:
        rows = await BaseRepository.fetch_all(
            """
            SELECT w.id, w.user_id, w.prize_id, w.tickets_at_win, w.won_at,
                   u.name AS user_name, u.avatar_url AS user_avatar_url,
                   z.name AS prize_name
            FROM winners w
            LEFT JOIN users u ON u.id = w.user_id
            LEFT JOIN prizes z ON z.id = w.prize_id
            WHERE w.raffle_id = ?
            ORDER BY w.won_at ASC
            """,
            (raffle_id,),
        )
        return [dict(row) for row in rows]

    @staticmethod
    async def multi_winner_stats() -> List[Dict[str, Any]]:
        rows = await BaseRepository.fetch_all(
            """
            SELECT w.user_id, COUNT(*) AS win_count, MAX(w.won_at) AS last_win_at,
                   u.name AS user_name, u.avatar_url AS user_avatar_url
            FROM winners w
            LEFT JOIN users u ON u.id = w.user_id
            GROUP BY w.user_id
            HAVING COUNT(*) >= 2
            ORDER BY win_count DESC, last_win_at DESC
            """
        )
        return [dict(row) for row in rows]
