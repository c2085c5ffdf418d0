"""
CRM - Service CRUD générique

One EntityService per collection. Every record carries a uuid `id`,
`createdAt` and `updatedAt`; Mongo's `_id` never leaves this module.
No transaction and no version check: concurrent updates are last-write-wins.
"""

import logging
from datetime import date, timedelta
from typing import Optional, List, Tuple

from pymongo import ReturnDocument

from config import db, new_id, now_iso

logger = logging.getLogger(__name__)

NO_ID = {"_id": 0}


class EntityService:
    """Accès Mongo d'un type d'entité"""

    def __init__(self, collection: str, label: str, statuses: Optional[List[str]] = None):
        self.collection_name = collection
        self.label = label
        self.statuses = statuses or []

    @property
    def collection(self):
        return db[self.collection_name]

    async def create(self, fields: dict) -> dict:
        now = now_iso()
        record = {"id": new_id(), **fields, "createdAt": now, "updatedAt": now}
        await self.collection.insert_one(record)
        record.pop("_id", None)
        logger.info(f"{self.label} created: {record['id']}")
        return record

    async def list(self, query: Optional[dict] = None) -> List[dict]:
        cursor = self.collection.find(query or {}, NO_ID).sort("createdAt", -1)
        return await cursor.to_list(None)

    async def get(self, record_id: str) -> Optional[dict]:
        return await self.collection.find_one({"id": record_id}, NO_ID)

    async def count(self, query: Optional[dict] = None) -> int:
        return await self.collection.count_documents(query or {})

    async def first(self) -> Optional[dict]:
        records = await self.collection.find({}, NO_ID).sort("createdAt", 1).limit(1).to_list(1)
        return records[0] if records else None

    async def update(self, record_id: str, changes: dict) -> Optional[dict]:
        """$set partiel. Retourne le document mis à jour ou None si id inconnu."""
        updated = await self.collection.find_one_and_update(
            {"id": record_id},
            {"$set": {**changes, "updatedAt": now_iso()}},
            projection=NO_ID,
            return_document=ReturnDocument.AFTER,
        )
        if updated:
            logger.info(f"{self.label} updated: {record_id} ({', '.join(changes)})")
        return updated

    async def update_status(self, record_id: str, status: str) -> Optional[dict]:
        # Flat field write: no transition rules between statuses
        updated = await self.update(record_id, {"status": status})
        if updated:
            logger.info(f"{self.label} {record_id} moved to {status}")
        return updated

    async def delete(self, record_id: str) -> Optional[dict]:
        deleted = await self.collection.find_one_and_delete({"id": record_id}, projection=NO_ID)
        if deleted:
            logger.info(f"{self.label} deleted: {record_id}")
        return deleted

    async def find_in_range(self, start: str, end: str, field: str = "date") -> List[dict]:
        """Plage semi-ouverte [start, end) sur un champ date stocké en ISO"""
        return await self.list({field: {"$gte": start, "$lt": end}})

    async def board(self) -> List[dict]:
        """Records grouped into one column per status, in enum order"""
        records = await self.list()
        columns = {status: [] for status in self.statuses}
        for record in records:
            columns.setdefault(record.get("status"), []).append(record)
        return [{"status": status, "items": items} for status, items in columns.items()]


# ==================== DATE RANGES ====================

def month_range(year: int, month: int) -> Tuple[str, str]:
    if not 1 <= month <= 12:
        raise ValueError("Invalid month. It must be between 1 and 12.")
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start.isoformat(), end.isoformat()


def year_range(year: int) -> Tuple[str, str]:
    return date(year, 1, 1).isoformat(), date(year + 1, 1, 1).isoformat()


def day_range(day: date) -> Tuple[str, str]:
    return day.isoformat(), (day + timedelta(days=1)).isoformat()
