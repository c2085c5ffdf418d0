"""
CRM - Notifications

Le payload est stocké tel quel (plus `id` et `createdAt`).
Aucune garantie de livraison, aucun rejeu à la reconnexion.
"""

import logging
from typing import List, Optional

from config import db, new_id, now_iso

logger = logging.getLogger(__name__)


async def store_notification(payload: dict) -> dict:
    record = {**payload, "id": new_id(), "createdAt": now_iso()}
    await db.notifications.insert_one(record)
    record.pop("_id", None)
    logger.info(f"Notification stored: {record['id']}")
    return record


async def list_notifications() -> List[dict]:
    return await db.notifications.find({}, {"_id": 0}).sort("createdAt", -1).to_list(None)


async def delete_notification(notification_id: str) -> Optional[dict]:
    return await db.notifications.find_one_and_delete({"id": notification_id}, projection={"_id": 0})


async def delete_all_notifications() -> int:
    result = await db.notifications.delete_many({})
    logger.info(f"{result.deleted_count} notification(s) deleted")
    return result.deleted_count
