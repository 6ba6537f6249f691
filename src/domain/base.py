"""Shared base for domain entities"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Timezone-aware current UTC time, used for every stored timestamp"""
    return datetime.now(timezone.utc)


def timestamp_column(nullable: bool = False, index: bool = False) -> Column:
    return Column(DateTime(timezone=True), nullable=nullable, index=index)


class BaseModel(SQLModel):
    """Base class for all SQLModel entities"""
    pass
