"""
CRM - Recherche globale

Substring match (case-insensitive) over a fixed list of text fields per
collection, at most SEARCH_LIMIT hits each. The eight finds run
concurrently and are all awaited: any failure fails the whole search.
Numeric fields (amount, totals...) are not searchable.
"""

import asyncio
import logging
import re
from typing import Dict, List

from config import db

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 5

# (clé réponse, collection, champs texte, page frontend, route frontend)
SEARCH_TARGETS = [
    ("leads", "leads",
     ["companyName", "customerName", "emailAddress", "contactNumber", "address",
      "productName", "gstNumber", "status", "date", "endDate", "notes"],
     "Leads", "/lead"),
    ("invoices", "invoices",
     ["companyName", "customerName", "emailAddress", "contactNumber", "address",
      "gstNumber", "productName", "status", "date", "endDate"],
     "Invoices", "/invoice"),
    ("deals", "deals",
     ["companyName", "customerName", "emailAddress", "contactNumber", "address",
      "productName", "gstNumber", "status", "date", "endDate", "notes"],
     "Deals", "/deal"),
    ("tasks", "tasks",
     ["name", "subject", "assigned", "relatedTo", "taskDate", "dueDate",
      "status", "priority", "notes"],
     "Tasks", "/task"),
    ("complaint", "complaints",
     ["complainerName", "companyName", "contactNumber", "emailAddress", "subject",
      "date", "caseStatus", "priority", "caseOrigin"],
     "Complaint", "/complaint"),
    ("contacts", "contacts",
     ["companyName", "customerName", "emailAddress", "contactNumber", "address",
      "gstNumber", "description"],
     "Contacts", "/contact"),
    ("accounts", "accounts",
     ["accountHolderName", "accountNumber", "bankName", "accountType", "IFSCCode", "UpiId"],
     "Accounts", "/Account"),
    ("schedules", "scheduled_events",
     ["subject", "assignedUser", "customer", "location", "status", "eventType",
      "priority", "description", "recurrence", "date"],
     "Schedules", "/Scheduled"),
]


def build_query(text: str, fields: List[str]) -> dict:
    pattern = {"$regex": re.escape(text), "$options": "i"}
    return {"$or": [{field: pattern} for field in fields]}


async def _search_collection(collection: str, query: dict) -> List[dict]:
    return await db[collection].find(query, {"_id": 0}).limit(SEARCH_LIMIT).to_list(SEARCH_LIMIT)


async def global_search(text: str) -> Dict[str, list]:
    """
    Retourne les résultats par collection + `suggestions`
    (pages ayant au moins un résultat, dans l'ordre de SEARCH_TARGETS).
    """
    results = await asyncio.gather(*[
        _search_collection(collection, build_query(text, fields))
        for _, collection, fields, _, _ in SEARCH_TARGETS
    ])

    response = {}
    suggestions = []
    for (key, _, _, page, path), hits in zip(SEARCH_TARGETS, results):
        response[key] = hits
        if hits:
            suggestions.append({"page": page, "path": path})
    response["suggestions"] = suggestions
    return response
