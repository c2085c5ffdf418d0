"""
Route de recherche globale
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pymongo.errors import PyMongoError

from services.search import global_search

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Search"])


@router.get("/search")
async def search(q: Optional[str] = None):
    """
    GET /api/v1/search?q=acme
    Pas de résultat partiel: une erreur Mongo fait échouer toute la requête.
    """
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Query is required")

    try:
        return await global_search(q.strip())
    except PyMongoError as e:
        logger.error(f"Search failed for {q!r}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")
