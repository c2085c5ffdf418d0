"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  CRM - Base commune des modèles                                              ║
║                                                                              ║
║  - Champs exposés en camelCase (contrat frontend), attributs en snake_case   ║
║  - Dates stockées en ISO-8601 (requêtes par plage lexicographique)           ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
DIGITS_PATTERN = r'^\d*$'


def is_valid_email_format(email: str) -> bool:
    """Vérifie le format email basique"""
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email))


def check_email(value: Optional[str]) -> Optional[str]:
    """Validator partagé: email optionnel mais bien formé s'il est fourni"""
    if value in (None, ""):
        return value
    value = value.strip()
    if not is_valid_email_format(value):
        raise ValueError("Invalid email address")
    return value


class CrmModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_document(self, partial: bool = False) -> dict:
        """
        Sérialise vers un document Mongo (clés camelCase, dates ISO).
        partial=True ne garde que les champs envoyés (update $set).
        Les dates avec fuseau sont ramenées en UTC (suffixe Z) pour que les
        plages lexicographiques restent justes.
        """
        doc = self.model_dump(mode="json", by_alias=True, exclude_unset=partial)
        for name, value in self:
            key = to_camel(name)
            if key in doc and isinstance(value, datetime) and value.utcoffset() is not None:
                doc[key] = value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
        return doc


class PipelineStatus(str, Enum):
    """Colonnes Kanban des leads et deals"""
    NEW = "New"
    DISCUSSION = "Discussion"
    DEMO = "Demo"
    PROPOSAL = "Proposal"
    DECIDED = "Decided"


class InvoiceStatus(str, Enum):
    PAID = "Paid"
    UNPAID = "Unpaid"
    PENDING = "Pending"


class CaseStatus(str, Enum):
    """Statut partagé par les tâches et les réclamations"""
    PENDING = "Pending"
    RESOLVED = "Resolved"
    IN_PROGRESS = "In Progress"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
