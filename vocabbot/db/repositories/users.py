from __future__ import annotations

from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from vocabbot.domain.models import BotState, UserRecord
from vocabbot.errors import RepositoryError, UserNotFoundError

_USER_COLUMNS = "id, username, first_name, registered_at, bot_state, current_page, language"


def _row_to_user(row: dict) -> UserRecord:
    return UserRecord(
        id=row["id"],
        username=row["username"],
        first_name=row["first_name"],
        registered_at=row["registered_at"],
        bot_state=BotState(row["bot_state"]),
        current_page=row["current_page"],
        language=row["language"],
    )


class UsersRepository:
    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def get(self, user_id: int) -> UserRecord | None:
        query = f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(query, (user_id,))
                row = await cursor.fetchone()
        return _row_to_user(row) if row else None

    async def find(self, user_id: int) -> UserRecord:
        user = await self.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def exists(self, user_id: int) -> bool:
        query = "SELECT 1 FROM users WHERE id = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query, (user_id,))
                row = await cursor.fetchone()
        return row is not None

    async def create(
        self,
        *,
        user_id: int,
        username: str | None,
        first_name: str | None,
        language: str,
    ) -> UserRecord:
        query = f"""
        INSERT INTO users (id, username, first_name, bot_state, current_page, language)
        VALUES (%s, %s, %s, %s, 0, %s)
        ON CONFLICT (id) DO UPDATE SET
            username = EXCLUDED.username,
            first_name = EXCLUDED.first_name
        RETURNING {_USER_COLUMNS}
        """
        async with self._pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(
                    query,
                    (user_id, username, first_name, BotState.DEFAULT.value, language),
                )
                row = await cursor.fetchone()
            await conn.commit()
        if row is None:
            raise RepositoryError("failed to create user")
        return _row_to_user(row)

    async def set_bot_state(self, user_id: int, state: BotState) -> None:
        query = "UPDATE users SET bot_state = %s WHERE id = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query, (state.value, user_id))
            await conn.commit()

    async def set_current_page(self, user_id: int, page: int) -> None:
        query = "UPDATE users SET current_page = %s WHERE id = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query, (max(0, page), user_id))
            await conn.commit()

    async def set_language(self, user_id: int, language: str) -> None:
        query = "UPDATE users SET language = %s WHERE id = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query, (language, user_id))
            await conn.commit()
