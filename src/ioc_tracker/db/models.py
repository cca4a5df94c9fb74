"""
SQLAlchemy ORM Models
=====================

Single-table schema for indicator entries.

Entries are append-only: rows are inserted by single creation or bulk
upload and never updated or deleted. Duplicate values are allowed.
"""

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Entry(Base):
    """
    Classified indicator (IP address or hash).

    Attributes:
        id: Store-assigned identity
        value: Trimmed IP or hash string
        type: ipv4, ipv6, md5, sha1 or sha256
        category: ip or hash, derived from type
        remark: Optional free-text annotation
        timestamp: ISO-8601 creation time (stored as text so it sorts
            lexicographically in creation order)
        meta: JSON snapshot of the source spreadsheet row, stored in the
            ``metadata`` column

    Indexes:
        - idx_entries_value on value for search
        - idx_entries_category on category for filtering and stats
    """

    __tablename__ = "entries"
    __table_args__ = (
        Index("idx_entries_value", "value"),
        Index("idx_entries_category", "category"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        nullable=False,
    )
    value: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    category: Mapped[str] = mapped_column(String(8), nullable=False)
    remark: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[str] = mapped_column(String(32), nullable=False)
    # 'metadata' is reserved on declarative classes
    meta: Mapped[str | None] = mapped_column("metadata", Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, value='{self.value}', type='{self.type}')>"
