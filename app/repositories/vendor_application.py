"""Vendor application repository — records and the id index in the KV store.

Key layout:
  vendor_application_<id>    one JSON record per application
  vendor_applications_list   JSON array of every application id, in submission order
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from app.repositories.kv_store import KeyValueStore
from app.schemas.vendor_application import VendorApplication

logger = logging.getLogger(__name__)

RECORD_KEY_PREFIX = "vendor_application_"
INDEX_KEY = "vendor_applications_list"


def record_key(application_id: str) -> str:
    return f"{RECORD_KEY_PREFIX}{application_id}"


class VendorApplicationRepository:
    def __init__(self, store: KeyValueStore):
        self._store = store

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def list_ids(self) -> list[str]:
        return list(await self._store.get(INDEX_KEY) or [])

    async def get(self, application_id: str) -> VendorApplication | None:
        raw = await self._store.get(record_key(application_id))
        if raw is None:
            return None
        return VendorApplication.model_validate(raw)

    async def get_many(self, ids: list[str]) -> list[VendorApplication | None]:
        """Records for *ids* in index order; ``None`` for missing or unreadable ones."""
        raws = await self._store.mget([record_key(i) for i in ids])
        records: list[VendorApplication | None] = []
        for application_id, raw in zip(ids, raws):
            if raw is None:
                logger.warning("Index references missing application %s", application_id)
                records.append(None)
                continue
            try:
                records.append(VendorApplication.model_validate(raw))
            except PydanticValidationError as exc:
                logger.warning("Skipping unreadable application %s: %s", application_id, exc)
                records.append(None)
        return records

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def add(self, application: VendorApplication) -> None:
        """Store a new record and index it in one transaction."""
        await self._store.set(record_key(application.id), _dump(application))
        await self._store.append(INDEX_KEY, application.id)
        await self._store.commit()

    async def save(self, application: VendorApplication) -> None:
        await self._store.set(record_key(application.id), _dump(application))
        await self._store.commit()


def _dump(application: VendorApplication) -> dict:
    return application.model_dump(mode="json", by_alias=True)
