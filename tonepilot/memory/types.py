"""Types for the conversation memory store."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any


class RetrievalMode(str, Enum):
    """How a retrieval result was selected."""
    CHRONOLOGICAL = "chronological"
    SEMANTIC = "semantic"


@dataclass(frozen=True)
class MemoryRecord:
    """One completed request/response pair."""

    id: str
    created_at: datetime
    query: str
    response: str
    original_length: int
    was_compacted: bool = False
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def intent(self) -> str:
        return self.metadata.get("intent", "unknown")

    @property
    def document(self) -> str:
        """Text ranked against new queries."""
        return f"{self.query} {self.response}"

    def copy(self) -> "MemoryRecord":
        """Return a copy that shares no mutable state with this record."""
        return replace(self, metadata=dict(self.metadata))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "query": self.query,
            "response": self.response,
            "original_length": self.original_length,
            "was_compacted": self.was_compacted,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MemoryRecord":
        """
        Build a record from its serialized form.

        Raises:
            KeyError, TypeError, ValueError: on missing or malformed fields.
        """
        response = str(data["response"])
        created_at = data.get("created_at")
        return cls(
            id=str(data["id"]),
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
            query=str(data["query"]),
            response=response,
            original_length=int(data.get("original_length", len(response))),
            was_compacted=bool(data.get("was_compacted", False)),
            metadata={str(k): str(v) for k, v in dict(data.get("metadata") or {}).items()},
        )


@dataclass(frozen=True)
class RetrievalResult:
    """A record selected for a query, with its score."""

    record: MemoryRecord
    score: float
    mode: RetrievalMode


@dataclass
class MemoryStats:
    """Snapshot of the store's size and compaction savings."""

    total_records: int
    compacted_count: int
    total_original_chars: int
    total_stored_chars: int
    compaction_ratio: float  # percent of characters saved, 0-100
    intent_breakdown: dict[str, int]
    oldest: datetime | None = None
    newest: datetime | None = None

    @property
    def space_saved(self) -> int:
        return self.total_original_chars - self.total_stored_chars

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_records": self.total_records,
            "compacted_count": self.compacted_count,
            "total_original_chars": self.total_original_chars,
            "total_stored_chars": self.total_stored_chars,
            "compaction_ratio": self.compaction_ratio,
            "space_saved": self.space_saved,
            "intent_breakdown": dict(self.intent_breakdown),
            "oldest": self.oldest.isoformat() if self.oldest else None,
            "newest": self.newest.isoformat() if self.newest else None,
        }
