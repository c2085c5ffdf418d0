"""Real-time notification bridge using Socket.IO.

Client emits `notify` -> payload persisted -> `notification-saved` ack to
the sender only -> raw payload rebroadcast as `notification` to every
connected client, whether or not the save succeeded.
"""

import logging

import socketio

from config import CORS_ORIGINS
from services.notifications import store_notification

logger = logging.getLogger(__name__)

sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins='*' if CORS_ORIGINS == ['*'] else CORS_ORIGINS,
)


@sio.event
async def connect(sid, environ):
    logger.info(f"Client connected: {sid}")


@sio.event
async def disconnect(sid):
    logger.info(f"Client disconnected: {sid}")


@sio.on('notify')
async def notify(sid, payload):
    """Handle a client-submitted notification.

    Non-object payloads are stored as {"message": payload} but rebroadcast
    exactly as received.
    """
    record = payload if isinstance(payload, dict) else {"message": payload}

    try:
        await store_notification(record)
    except Exception as e:
        logger.error(f"Error storing notification from {sid}: {e}")
        await sio.emit('notification-saved', {'success': False, 'error': str(e)}, to=sid)
    else:
        await sio.emit('notification-saved', {'success': True}, to=sid)

    await broadcast(payload)


async def broadcast(payload):
    """Fan out to all connected clients."""
    await sio.emit('notification', payload)
