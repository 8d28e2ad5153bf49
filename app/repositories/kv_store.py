"""Key-value store over the ``kv_store`` table.

Values are arbitrary JSON. Writes are flushed into the caller's session and
become durable on :meth:`KeyValueStore.commit` (or when the request-scoped
session from ``get_db`` commits).
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DownstreamError
from app.domain.kv import KVEntry


@contextmanager
def _store_errors() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise DownstreamError("Key-value store error", details=str(exc)) from exc


class KeyValueStore:
    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        with _store_errors():
            entry = await self._session.get(KVEntry, key)
        return entry.value if entry is not None else None

    async def mget(self, keys: list[str]) -> list[Any | None]:
        """Values for *keys* in the same order; ``None`` where a key is missing."""
        if not keys:
            return []
        with _store_errors():
            result = await self._session.execute(
                select(KVEntry).where(KVEntry.key.in_(set(keys)))
            )
            found = {entry.key: entry.value for entry in result.scalars().all()}
        return [found.get(key) for key in keys]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def set(self, key: str, value: Any) -> None:
        with _store_errors():
            entry = await self._session.get(KVEntry, key)
            if entry is None:
                self._session.add(KVEntry(key=key, value=value))
            else:
                entry.value = value
            await self._session.flush()

    async def append(self, key: str, item: Any) -> list:
        """Append *item* to the JSON list stored at *key* unless already present.

        The row is locked (``SELECT ... FOR UPDATE``) for the rest of the
        transaction so concurrent appends serialize instead of overwriting
        each other. Returns the resulting list.
        """
        with _store_errors():
            result = await self._session.execute(
                select(KVEntry)
                .where(KVEntry.key == key)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            entry = result.scalars().first()
            current = list(entry.value or []) if entry is not None else []
            if item in current:
                return current
            updated = current + [item]
            if entry is None:
                self._session.add(KVEntry(key=key, value=updated))
            else:
                entry.value = updated
            await self._session.flush()
        return updated

    async def commit(self) -> None:
        with _store_errors():
            await self._session.commit()
