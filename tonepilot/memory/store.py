"""Session-scoped conversation memory with bounded FIFO eviction."""

import json
import uuid
from datetime import datetime
from enum import Enum
from typing import Any

from loguru import logger

from tonepilot.config.schema import MemoryConfig
from tonepilot.errors import InvalidInputError, MalformedImportError, SummarizerUnavailableError
from tonepilot.memory.retrieval import BM25Scorer, is_chronological_query
from tonepilot.memory.types import MemoryRecord, MemoryStats, RetrievalMode, RetrievalResult
from tonepilot.providers.base import SessionStorage, SummarizerBackend
from tonepilot.utils.helpers import with_timeout

TRUNCATION_MARKER = "..."
DEFAULT_METADATA = {"intent": "unknown", "output_type": "unknown", "tone": "unknown"}
CHRONOLOGICAL_SCORE_STEP = 0.1


def _as_text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class ContextMemoryStore:
    """
    Conversation memory for one assistant session.

    Holds at most `config.max_items` records in insertion order. When full, an
    append drops the oldest record first (FIFO; reads never change the order).
    Long responses are compacted through the summarizer before they are stored,
    and the whole collection is written to session storage after every change.
    Summarizer and storage failures are logged and never fail the operation.
    """

    def __init__(
        self,
        config: MemoryConfig | None = None,
        summarizer: SummarizerBackend | None = None,
        storage: SessionStorage | None = None,
    ):
        self.config = config or MemoryConfig()
        self.summarizer = summarizer
        self.storage = storage
        self._records: list[MemoryRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def size(self) -> int:
        return len(self._records)

    # -- Persistence --

    async def load(self) -> int:
        """
        Replace the in-memory records with what session storage holds.

        Returns:
            Number of records loaded. Unreadable or malformed data leaves an
            empty store.
        """
        if self.storage is None:
            return 0

        try:
            stored = await with_timeout(self.storage.get(self.config.storage_key), self.config.io_timeout)
        except Exception as e:
            logger.error(f"Failed to load memory from session storage: {e}")
            self._records = []
            return 0

        if stored is None:
            logger.debug("No existing memory in session, starting fresh")
            self._records = []
            return 0

        try:
            self._records = self._parse_records(stored)
        except MalformedImportError as e:
            logger.error(f"Discarding malformed session memory: {e}")
            self._records = []
            return 0

        logger.info(f"Loaded {len(self._records)} memory records from session storage")
        return len(self._records)

    async def _persist(self) -> None:
        if self.storage is None:
            return
        try:
            await with_timeout(
                self.storage.set(self.config.storage_key, self.export_all()),
                self.config.io_timeout,
            )
            logger.debug(f"Saved {len(self._records)} memory records to session storage")
        except Exception as e:
            logger.error(f"Failed to save memory to session storage: {e}")

    # -- Writes --

    async def append(
        self,
        query: str,
        response: str,
        metadata: dict[str, Any] | None = None,
    ) -> MemoryRecord:
        """
        Record a completed request/response pair.

        Args:
            query: The user's request.
            response: The generated content.
            metadata: Extra string fields (intent, output_type, tone, ...).

        Returns:
            A copy of the stored record.

        Raises:
            InvalidInputError: If query or response is blank.
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidInputError("query must be a non-empty string")
        if not isinstance(response, str) or not response.strip():
            raise InvalidInputError("response must be a non-empty string")

        stored_query = self._truncate_query(query)

        stored_response = response
        was_compacted = False
        if len(response) > self.config.compaction_threshold:
            summary = await self._compact(response)
            if summary:
                stored_response = summary
                was_compacted = True
                logger.debug(f"Compacted response: {len(response)} -> {len(summary)} chars")

        record = MemoryRecord(
            id=self._generate_id(),
            created_at=datetime.now(),
            query=stored_query,
            response=stored_response,
            original_length=len(response),
            was_compacted=was_compacted,
            metadata=self._build_metadata(metadata),
        )

        while len(self._records) >= self.config.max_items:
            removed = self._records.pop(0)
            logger.debug(f"Evicted oldest memory record {removed.id}")
        self._records.append(record)

        await self._persist()
        logger.debug(f"Added conversation to memory: {record.id}")
        return record.copy()

    async def _compact(self, response: str) -> str | None:
        """Summarize a long response. Returns None when compaction is unavailable."""
        try:
            if self.summarizer is None:
                raise SummarizerUnavailableError("no summarizer configured")
            summary = await with_timeout(
                self.summarizer.summarize(response, type="key-points", length="short"),
                self.config.io_timeout,
            )
        except Exception as e:
            logger.warning(f"Compaction skipped, storing original response: {e}")
            return None

        if not isinstance(summary, str) or not summary.strip():
            logger.warning("Summarizer returned empty text, storing original response")
            return None
        return summary.strip()

    async def delete(self, record_id: str) -> bool:
        """Delete a record by id. Returns False if it does not exist."""
        for i, record in enumerate(self._records):
            if record.id == record_id:
                del self._records[i]
                await self._persist()
                logger.debug(f"Deleted memory record {record_id}")
                return True
        logger.warning(f"Memory record not found: {record_id}")
        return False

    async def clear(self) -> int:
        """Remove all records. Returns how many were removed."""
        removed = len(self._records)
        self._records = []
        await self._persist()
        logger.info(f"Cleared memory: {removed} records removed")
        return removed

    # -- Bulk maintenance --

    def export_all(self) -> list[dict[str, Any]]:
        """Serialize every record, oldest first."""
        return [r.to_dict() for r in self._records]

    def export_json(self) -> str:
        return json.dumps(self.export_all(), indent=2, ensure_ascii=False)

    async def import_all(self, records: list[dict[str, Any]] | str) -> int:
        """
        Replace the store's contents with exported records.

        Args:
            records: A list as produced by export_all(), or its JSON text.

        Returns:
            Number of records now held.

        Raises:
            MalformedImportError: If the payload is not a list of records. The
                existing records are left untouched.
        """
        if isinstance(records, str):
            try:
                records = json.loads(records)
            except json.JSONDecodeError as e:
                raise MalformedImportError(f"Invalid JSON: {e}") from e

        parsed = self._parse_records(records)
        if len(parsed) > self.config.max_items:
            logger.warning(
                f"Import holds {len(parsed)} records, keeping the newest {self.config.max_items}"
            )
            parsed = parsed[-self.config.max_items:]

        self._records = parsed
        await self._persist()
        logger.info(f"Imported {len(parsed)} memory records")
        return len(parsed)

    @staticmethod
    def _parse_records(payload: Any) -> list[MemoryRecord]:
        if not isinstance(payload, list):
            raise MalformedImportError(f"Expected a list of records, got {type(payload).__name__}")
        parsed = []
        for i, item in enumerate(payload):
            if not isinstance(item, dict):
                raise MalformedImportError(f"Record {i} is not an object")
            try:
                parsed.append(MemoryRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                raise MalformedImportError(f"Record {i} is malformed: {e}") from e
        return parsed

    # -- Reads --

    def get_all(self) -> list[MemoryRecord]:
        """All records, oldest first."""
        return [r.copy() for r in self._records]

    def retrieve_recent(self, count: int = 10) -> list[MemoryRecord]:
        """The `count` newest records, newest first."""
        if count <= 0:
            return []
        return [r.copy() for r in reversed(self._records[-count:])]

    def retrieve_relevant(self, query: str, top_k: int = 5) -> list[RetrievalResult]:
        """
        Rank records for a new request.

        Requests that ask about earlier turns ("what did I ask earlier") get
        the newest records with descending synthetic scores. Everything else is
        ranked by BM25 over each record's query and response.

        Returns:
            At most `top_k` results, best first. Empty when the store is empty.
        """
        if not self._records or top_k <= 0:
            return []

        if is_chronological_query(query):
            logger.debug("Chronological query detected, returning recent records")
            return [
                RetrievalResult(
                    record=record,
                    score=round(max(1.0 - CHRONOLOGICAL_SCORE_STEP * i, 0.0), 2),
                    mode=RetrievalMode.CHRONOLOGICAL,
                )
                for i, record in enumerate(self.retrieve_recent(top_k))
            ]

        scorer = BM25Scorer(self._records)
        scored = [
            RetrievalResult(record=record.copy(), score=score, mode=RetrievalMode.SEMANTIC)
            for record, score in zip(self._records, scorer.score_query(query))
        ]
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:top_k]

    def search(self, term: str) -> list[MemoryRecord]:
        """Records whose query or response contains `term` (case-insensitive)."""
        if not term or not term.strip():
            raise InvalidInputError("search term must be a non-empty string")
        needle = term.lower()
        return [
            r.copy() for r in self._records
            if needle in r.query.lower() or needle in r.response.lower()
        ]

    def filter_by_metadata(self, **filters: str) -> list[MemoryRecord]:
        """Records whose metadata matches every given key/value."""
        return [
            r.copy() for r in self._records
            if all(r.metadata.get(k) == str(v) for k, v in filters.items())
        ]

    # -- Prompt context --

    def get_context_string(self, count: int = 5) -> str:
        """Format the newest records for prompt injection."""
        recent = self.retrieve_recent(count)
        if not recent:
            return ""
        lines = [
            f"[{len(recent) - i}] Q: {r.query}\nA: {r.response}"
            for i, r in enumerate(recent)
        ]
        return "RECENT CONVERSATION CONTEXT:\n\n" + "\n\n".join(lines)

    def get_relevant_context_string(self, query: str, top_k: int = 3) -> str:
        """Format the records most relevant to `query` for prompt injection."""
        results = self.retrieve_relevant(query, top_k)
        if not results:
            return ""
        lines = []
        for i, result in enumerate(results, start=1):
            if result.mode == RetrievalMode.CHRONOLOGICAL:
                label = "Recent"
            else:
                label = f"Score: {result.score:.2f}"
            lines.append(f"[{i}] ({label}) Q: {result.record.query}\nA: {result.record.response}")
        return "RELEVANT CONVERSATION CONTEXT:\n\n" + "\n\n".join(lines)

    # -- Stats --

    def stats(self) -> MemoryStats:
        total_original = sum(r.original_length for r in self._records)
        total_stored = sum(len(r.response) for r in self._records)
        ratio = round((1 - total_stored / total_original) * 100, 1) if total_original > 0 else 0.0

        breakdown: dict[str, int] = {}
        for r in self._records:
            breakdown[r.intent] = breakdown.get(r.intent, 0) + 1

        return MemoryStats(
            total_records=len(self._records),
            compacted_count=sum(1 for r in self._records if r.was_compacted),
            total_original_chars=total_original,
            total_stored_chars=total_stored,
            compaction_ratio=ratio,
            intent_breakdown=breakdown,
            oldest=self._records[0].created_at if self._records else None,
            newest=self._records[-1].created_at if self._records else None,
        )

    # -- Helpers --

    def _truncate_query(self, query: str) -> str:
        limit = self.config.max_query_length
        if len(query) <= limit:
            return query
        return query[:limit] + TRUNCATION_MARKER

    @staticmethod
    def _build_metadata(metadata: dict[str, Any] | None) -> dict[str, str]:
        merged = dict(DEFAULT_METADATA)
        for key, value in (metadata or {}).items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                merged[str(key)] = ",".join(_as_text(v) for v in value)
            else:
                merged[str(key)] = _as_text(value)
        return merged

    @staticmethod
    def _generate_id() -> str:
        return f"mem_{uuid.uuid4().hex[:12]}"
