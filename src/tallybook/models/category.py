"""Transaction category definitions."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, SQLModel

NAME_MAX_LENGTH = 64


def generate_category_id() -> str:
    """Return a new opaque category id."""

    return f"cat_{uuid.uuid4().hex[:16]}"


class Category(SQLModel, table=True):
    """Label partitioning transactions for reporting.

    Icon and color are display hints only; aggregation reads ``id`` and ``name``.
    """

    __tablename__: ClassVar[str] = "category"

    id: str = Field(default_factory=generate_category_id, primary_key=True, max_length=64)
    name: str = Field(index=True, unique=True, nullable=False, max_length=NAME_MAX_LENGTH)
    category_type: str = Field(default="expense", nullable=False, max_length=16)
    icon: Optional[str] = Field(default=None, max_length=32)
    color: Optional[str] = Field(default=None, max_length=7)
    is_default: bool = Field(default=False)
    created_at: NaiveDatetime = Field(default_factory=datetime.now, nullable=False)
