from __future__ import annotations

from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from vocabbot.domain.models import PhraseRecord
from vocabbot.errors import PhraseNotFoundError, RepositoryError


class PhrasesRepository:
    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def add(self, *, user_id: int, text: str) -> PhraseRecord:
        query = """
        INSERT INTO phrases (user_id, text)
        VALUES (%s, %s)
        RETURNING id, user_id, text, created_at
        """
        async with self._pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(query, (user_id, text))
                row = await cursor.fetchone()
            await conn.commit()
        if row is None:
            raise RepositoryError("failed to insert phrase")
        return PhraseRecord(**row)

    async def get(self, phrase_id: int) -> PhraseRecord:
        query = "SELECT id, user_id, text, created_at FROM phrases WHERE id = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(query, (phrase_id,))
                row = await cursor.fetchone()
        if row is None:
            raise PhraseNotFoundError(phrase_id)
        return PhraseRecord(**row)

    async def find_by_text(self, *, user_id: int, text: str) -> PhraseRecord | None:
        query = """
        SELECT id, user_id, text, created_at
        FROM phrases
        WHERE user_id = %s AND text = %s
        """
        async with self._pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(query, (user_id, text))
                row = await cursor.fetchone()
        return PhraseRecord(**row) if row else None

    async def exists(self, *, user_id: int, text: str) -> bool:
        query = "SELECT 1 FROM phrases WHERE user_id = %s AND lower(text) = lower(%s) LIMIT 1"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query, (user_id, text))
                row = await cursor.fetchone()
        return row is not None

    async def list_texts(self, user_id: int) -> list[str]:
        query = "SELECT text FROM phrases WHERE user_id = %s ORDER BY id ASC"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query, (user_id,))
                rows = await cursor.fetchall()
        return [row[0] for row in rows]

    async def count(self, user_id: int) -> int:
        query = "SELECT COUNT(*) FROM phrases WHERE user_id = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query, (user_id,))
                row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def delete(self, phrase_id: int) -> None:
        query = "DELETE FROM phrases WHERE id = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query, (phrase_id,))
                deleted = cursor.rowcount
            await conn.commit()
        if deleted == 0:
            raise PhraseNotFoundError(phrase_id)
