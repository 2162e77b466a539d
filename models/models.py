# models/models.py
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, Text


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# KEY-VALUE ENTRY
# ============================================================
class KVEntry(SQLModel, table=True):
    """One key of the key-value store; ``value`` holds a JSON document."""

    __tablename__ = "kv_entry"

    key: str = Field(primary_key=True, max_length=200)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
