"""
Verse Graph API — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract for verse, source and
       hasSource records, plus the shared error and health payloads.
How:   FastAPI validates request bodies against the *In models and
       serializes responses through the *Out models (by alias, so system
       attributes keep their ArangoDB names `_key`, `_id`, `_rev`, `_from`,
       `_to`).

Records are schema-less: every model allows extra fields and passes them
through untouched. Only the store-managed attributes are declared.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class RecordIn(BaseModel):
    """
    What:  Body of POST and PUT for document resources (verse, source).
    How:   Any JSON object. `_key` picks the key on create (store-assigned
           when omitted); `_rev` on replace asks the store to reject the
           write if the record changed since that revision.
    """

    key: Optional[str] = Field(
        default=None,
        alias="_key",
        min_length=1,
        description="Client-chosen key (assigned by the store when omitted)",
    )
    rev: Optional[str] = Field(
        default=None,
        alias="_rev",
        description="Expected current revision; a stale value yields 409",
    )

    model_config = ConfigDict(extra="allow")

    def to_record(self) -> Dict[str, Any]:
        """Plain dict for the store: extra fields plus any system attributes given."""
        record: Dict[str, Any] = dict(self.model_extra or {})
        if self.key is not None:
            record["_key"] = self.key
        if self.rev is not None:
            record["_rev"] = self.rev
        return record


class EdgeRecordIn(RecordIn):
    """
    What:  Body of POST and PUT for edge resources (hasSource).
    How:   Same as RecordIn plus the two mandatory relationship pointers.
           A body without them fails validation (422) before the store is
           touched.
    """

    from_: str = Field(alias="_from", description="Origin document id, e.g. 'verse/123'")
    to: str = Field(alias="_to", description="Destination document id, e.g. 'source/456'")

    def to_record(self) -> Dict[str, Any]:
        record = super().to_record()
        record["_from"] = self.from_
        record["_to"] = self.to
        return record


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class RecordOut(BaseModel):
    """A stored record: application fields plus store metadata."""

    key: str = Field(alias="_key", description="Unique key within the collection")
    id: str = Field(alias="_id", description="Collection-qualified key")
    rev: str = Field(alias="_rev", description="Current revision token")

    model_config = ConfigDict(extra="allow")


class EdgeRecordOut(RecordOut):
    """A stored edge record."""

    from_: str = Field(alias="_from", description="Origin document id")
    to: str = Field(alias="_to", description="Destination document id")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "code": 404,
            "message": "document not found",
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    code: int = Field(description="HTTP status code")
    message: str = Field(description="Error text (store message when the store reported it)")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="ArangoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
