"""
CRM - Fichiers et dossiers
Hiérarchie à un seul niveau: un fichier peut avoir un dossier parent,
un dossier n'a jamais de parent.
"""

from enum import Enum
from pydantic import Field

from .common import CrmModel


class FileKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"


class FolderCreate(CrmModel):
    name: str = Field(min_length=1)
