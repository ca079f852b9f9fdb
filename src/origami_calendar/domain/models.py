from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

Scalar = Union[str, int, float, bool, None]
RawRecord = Dict[str, Any]

_SCALAR_TYPES = (str, int, float, bool, type(None))


def scalar_extensions(record: Mapping[str, Any]) -> Mapping[str, Scalar]:
    """Read-only copy of the scalar fields of a backend record."""
    return MappingProxyType(
        {str(key): value for key, value in record.items() if isinstance(value, _SCALAR_TYPES)}
    )


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    id: str
    title: str
    start: datetime
    end: datetime
    display_hint: Optional[str] = None
    extensions: Mapping[str, Scalar] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "display_hint": self.display_hint,
            "extensions": dict(self.extensions),
        }


@dataclass(frozen=True, slots=True)
class FetchResult:
    events: Tuple[CalendarEvent, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class Configuration:
    """Connection details supplied by the settings collaborator.

    The credential is only used by deployments that run the forwarder
    in-process; the HTTP proxy reads its own from the server environment.
    """

    base_url: str = ""
    collection_id: str = ""
    credential: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url.strip() and self.collection_id.strip())

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Configuration":
        return cls(
            base_url=str(record.get("base_url") or ""),
            collection_id=str(record.get("collection_id") or ""),
            credential=record.get("credential") or None,
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "base_url": self.base_url,
            "collection_id": self.collection_id,
            "credential": self.credential,
        }


class SearchRequest(BaseModel):
    """Inbound forwarder body; keys other than the target are search filters."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    collection_id: Optional[str] = Field(default=None, alias="collectionId")

    @property
    def filters(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class ErrorEnvelope(BaseModel):
    error: str
    details: Optional[str] = Field(default=None)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
