"""
Routes pour les Notifications
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from services.notification_bridge import broadcast
from services.notifications import (
    store_notification,
    list_notifications,
    delete_notification,
    delete_all_notifications,
)

router = APIRouter(prefix="/notification", tags=["Notifications"])


@router.post("", status_code=201)
async def create_notification(payload: Dict[str, Any] = Body(...)):
    """Stocke puis diffuse à tous les clients Socket.IO connectés"""
    record = await store_notification(payload)
    await broadcast(payload)
    return {"success": True, "message": "Notification stored successfully", "data": record}


@router.get("")
async def get_notifications():
    notifications = await list_notifications()
    return {"success": True, "data": notifications, "count": len(notifications)}


@router.delete("")
async def remove_all_notifications():
    deleted = await delete_all_notifications()
    return {"success": True, "message": "All notifications deleted successfully", "deleted": deleted}


@router.delete("/{notification_id}")
async def remove_notification(notification_id: str):
    deleted = await delete_notification(notification_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True, "message": "Notification deleted successfully", "data": deleted}
