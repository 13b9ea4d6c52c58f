"""Shared base for domain models"""

from datetime import datetime, timezone
from sqlmodel import SQLModel


class BaseModel(SQLModel):
    """Base class for all domain entities and value models"""


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the storage convention)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
