"""
Entry Schemas
=============

Pydantic models for indicator entries, shared by the ingestion
pipeline, the repository layer and the HTTP API.
"""

from enum import Enum
from typing import Annotated, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)


class Category(str, Enum):
    """Coarse grouping of an indicator."""

    IP = "ip"
    HASH = "hash"


class IndicatorType(str, Enum):
    """Fine-grained indicator classification."""

    IPV4 = "ipv4"
    IPV6 = "ipv6"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"

    @property
    def category(self) -> Category:
        """Category derived from the type: ip for addresses, hash otherwise."""
        if self in (IndicatorType.IPV4, IndicatorType.IPV6):
            return Category.IP
        return Category.HASH


class EntryCreate(BaseModel):
    """
    Candidate entry, not yet persisted.

    Produced by the row normalizer during ingestion and accepted as the
    request body of single-entry creation. ``timestamp`` is filled at
    persistence time when absent.

    Attributes:
        value: Trimmed IP address or hash string
        type: Indicator type
        category: Must match ``type.category``
        remark: Free-text annotation
        timestamp: ISO-8601 creation time
        metadata: JSON snapshot of the source spreadsheet row
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "value": "10.0.0.1",
                "type": "ipv4",
                "category": "ip",
                "remark": "seen in proxy logs",
            }
        }
    )

    value: Annotated[
        str,
        StringConstraints(strip_whitespace=True, min_length=1),
        Field(description="IP address or hash"),
    ]
    type: Annotated[IndicatorType, Field(description="Indicator type")]
    category: Annotated[Category, Field(description="ip or hash")]
    remark: Annotated[str | None, Field(description="Free-text remark")] = ""
    timestamp: Annotated[
        str | None, Field(description="ISO-8601 creation time")
    ] = None
    metadata: Annotated[
        str | None, Field(description="Serialized source row")
    ] = None

    @model_validator(mode="after")
    def check_category_matches_type(self) -> Self:
        """Reject a category that contradicts the type."""
        expected = self.type.category
        if self.category != expected:
            raise ValueError(
                f"category '{self.category.value}' does not match type "
                f"'{self.type.value}' (expected '{expected.value}')"
            )
        return self


class EntryRead(BaseModel):
    """Persisted entry as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    value: str
    type: IndicatorType
    category: Category
    remark: str | None = None
    timestamp: str
    metadata: str | None = Field(
        default=None,
        validation_alias=AliasChoices("meta", "metadata"),
    )


class EntryStats(BaseModel):
    """Aggregate counts over all stored entries."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"total": 12, "ips": 7, "hashes": 5}}
    )

    total: Annotated[int, Field(ge=0, description="All entries")] = 0
    ips: Annotated[int, Field(ge=0, description="Entries in the ip category")] = 0
    hashes: Annotated[int, Field(ge=0, description="Entries in the hash category")] = 0
